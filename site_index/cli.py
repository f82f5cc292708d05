# === FILE: site_index/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteIndex через командную строку.

Команды:
  crawl DOMAIN  Обойти домен и вывести/сохранить посещённые страницы
  config        Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --exclude PREFIX    Префикс пути, который не обходится (можно повторять)
  --single            Загрузить только корневую страницу
  --concurrency N     Число одновременных загрузок
  --state PATH        SQLite-файл состояния для продолжения обхода
  --json PATH         Сохранить результат в JSON-файл
  --html PATH         Сохранить HTML-сводку
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Пример:
  site-index crawl example.com --exclude /private --json crawl.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_index import __version__
from site_index.config import load_config
from site_index.crawler.models import CrawlProgress
from site_index.engine import start_crawl
from site_index.logger import DEFAULT_FORMAT, init_logging, logger
from site_index.report.html_report import render_html
from site_index.report.json_report import records_to_dicts, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def log_progress(progress: CrawlProgress) -> None:
    logger.info(
        "[%d] %s (в пуле: %d)", progress.total_visited, progress.url, progress.remaining_pool_size
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteIndex, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteIndex CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
        stream='stderr',
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Некорректная конфигурация: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('domain', required=False)
@click.option('--exclude', '-e', 'exclusions', multiple=True, help='Исключаемый префикс пути')
@click.option('--single', 'is_single', is_flag=True, default=None, help='Только корневая страница')
@click.option('--concurrency', type=int, default=None, help='Число одновременных загрузок')
@click.option('--timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.option('--retry', 'retry_times', type=int, default=None, help='Повторы при 5xx/429')
@click.option(
    '--state', 'state_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='SQLite-файл состояния обхода'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-результат в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-сводку в файл'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def crawl(ctx, domain, exclusions, is_single, concurrency, timeout, retry_times, state_file,
          crawl_timeout, json_output, html_output, pretty):
    """Обойти домен и сохранить посещённые страницы."""
    cfg = _load(
        ctx,
        domain=domain,
        exclusions=list(exclusions) or None,
        is_single=is_single,
        concurrency=concurrency,
        timeout=timeout,
        retry_times=retry_times,
        state_file=state_file,
        crawl_timeout=crawl_timeout,
    )
    click.echo(f'Starting crawl of {cfg.target.root_url}', err=True)
    try:
        records = asyncio.run(start_crawl(cfg, progress=log_progress))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {cfg.crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    # без файлов вывода результат идёт в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(records_to_dicts(records), ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(records, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(records, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--domain', '-d', default=None, help='Домен (если не задан в конфиге)')
@click.pass_context
def show_config(ctx, domain):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(ctx, domain=domain)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
