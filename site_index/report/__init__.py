"""site_index.report: запись результата обхода в JSON и HTML."""

from __future__ import annotations

from site_index.report.html_report import render_html
from site_index.report.json_report import records_to_dicts, render_json

__all__ = ["render_json", "render_html", "records_to_dicts"]
