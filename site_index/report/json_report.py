# site_index/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteIndex.

Сериализация списка посещённых страниц в файл.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from site_index.crawler.models import VisitedRecord


def records_to_dicts(records: Iterable[VisitedRecord]) -> List[Dict[str, Any]]:
    """Преобразует записи в список словарей {url, content} в порядке обхода."""
    return [record.as_dict() for record in records]


def render_json(
    records: Iterable[VisitedRecord], output_path: Path | str, *, pretty: bool = True
) -> Path:
    """
    Сохраняет результат обхода в формате JSON по указанному пути.

    :param records: посещённые страницы
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо компактной записи
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_index.report.json_report import render_json
    report_path = render_json(records, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(records_to_dicts(records), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
