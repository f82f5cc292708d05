"""site_index.report.html_report: Генерация HTML-сводки обхода с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Union

from jinja2 import Environment, PackageLoader, select_autoescape

from site_index.crawler.models import VisitedRecord


def render_html(records: Iterable[VisitedRecord], output_path: Union[Path, str]) -> Path:
    """Рендерит HTML-сводку из шаблона пакета и сохраняет её по указанному пути.

    Args:
        records: посещённые страницы в порядке обхода.
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=PackageLoader("site_index", "templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    pages = list(records)
    context: dict[str, Any] = {
        "pages": pages,
        "total": len(pages),
        "total_bytes": sum(len(p.content.encode("utf-8")) for p in pages),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
