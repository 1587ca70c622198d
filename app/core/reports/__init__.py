"""
Report Rendering Module

Printable HTML, PDF export and the viewer's section catalogue for
assistant-generated diagnostic reports.
"""
from .html_report import (
    first_name,
    render_email_bodies,
    render_report_html,
    report_badge,
    report_filename,
)
from .pdf_renderer import PdfConfig, PdfRenderer
from .sections import REPORT_SECTIONS, available_sections, has_content, humanize_key

__all__ = [
    "first_name",
    "render_email_bodies",
    "render_report_html",
    "report_badge",
    "report_filename",
    "PdfConfig",
    "PdfRenderer",
    "REPORT_SECTIONS",
    "available_sections",
    "has_content",
    "humanize_key",
]
