"""
PDF Renderer

Turns a generated HTML document into an A4 PDF with WeasyPrint.
"""
from dataclasses import dataclass
from typing import Optional

from app.utils import ReportRenderError, get_logger

logger = get_logger(__name__)


@dataclass
class PdfConfig:
    page_size: str = "A4"
    margin: str = "2cm"

    @property
    def page_css(self) -> str:
        return f"@page {{ size: {self.page_size}; margin: {self.margin}; }}"


class PdfRenderer:
    """HTML -> PDF. Page size and margins override whatever the HTML declares."""

    def __init__(self, config: Optional[PdfConfig] = None):
        self.config = config or PdfConfig()

    def render(self, html: str) -> bytes:
        """
        Render ``html`` to PDF bytes.

        WeasyPrint is imported here so that the API can start on hosts
        without its native text-layout libraries; only PDF routes need them.
        """
        if not html:
            raise ReportRenderError("Nothing to render", stage="pdf")

        try:
            from weasyprint import CSS, HTML

            pdf = HTML(string=html).write_pdf(stylesheets=[CSS(string=self.config.page_css)])
        except ReportRenderError:
            raise
        except Exception as e:
            logger.error(f"PDF rendering failed: {e}")
            raise ReportRenderError(f"Failed to generate PDF: {e}", stage="pdf") from e

        logger.info(f"Rendered PDF ({len(pdf)} bytes, {self.config.page_size})")
        return pdf
