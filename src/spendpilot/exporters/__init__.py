"""Exporters package — convert expenses and dashboards to output formats."""
from spendpilot.exporters.data import export_to_csv, export_to_json, select_for_export
from spendpilot.exporters.html import render_html
from spendpilot.exporters.markdown import render_markdown

__all__ = [
    "export_to_csv",
    "export_to_json",
    "render_html",
    "render_markdown",
    "select_for_export",
]
