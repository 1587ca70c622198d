"""
Report Service

Linear request flows behind the HTTP routes:

- generate: intake -> assistant run -> parse -> best-effort persist
- export: report -> HTML -> PDF
- deliver: report -> PDF -> email
"""
import json
from typing import Any, Dict, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from app.config import AppConfig
from app.core.assistant import AssistantClient, extract_input, is_report_like, try_parse_json
from app.core.reports import (
    PdfRenderer,
    available_sections,
    render_email_bodies,
    render_report_html,
    report_filename,
)
from app.models.report import GenerateReportData
from app.utils import ConfigurationError, NotFoundError, ValidationError, get_logger

from .mailer import ReportMailer
from .storage import ReportRepository

logger = get_logger(__name__)

# Form fields copied into the stored report's personal snapshot
CONTACT_FIELDS = ("name", "email", "phoneNumber")


def merge_contact_fields(report: Dict[str, Any], form_data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy non-empty contact details from the intake form into ``personal_snapshot``."""
    snapshot = report.get("personal_snapshot")
    if not isinstance(snapshot, dict):
        snapshot = {}
        report["personal_snapshot"] = snapshot

    for key in CONTACT_FIELDS:
        value = form_data.get(key)
        if value:
            snapshot[key] = value
    return report


class ReportService:
    """
    Orchestrates the assistant, report store, PDF renderer and mailer.

    Collaborators are injected so the API can swap them out in tests.
    """

    def __init__(
        self,
        assistant: AssistantClient,
        repository: ReportRepository,
        renderer: PdfRenderer,
        mailer: ReportMailer,
        app_config: Optional[AppConfig] = None,
    ):
        self.assistant = assistant
        self.repository = repository
        self.renderer = renderer
        self.mailer = mailer
        self.app_config = app_config or AppConfig()

    async def generate(self, body: Dict[str, Any]) -> GenerateReportData:
        """
        Produce a report from an intake submission.

        Args:
            body: ``{"input": str}`` or ``{"formData": {...}}``

        Returns:
            Raw and parsed assistant reply plus the stored report id (if any)
        """
        input_text = extract_input(body)

        reply = await self.assistant.run(input_text)
        is_json, value = try_parse_json(reply.text)

        response_id = None
        if is_report_like(is_json, value):
            form_data = body.get("formData")
            if isinstance(form_data, dict):
                merge_contact_fields(value, form_data)
            response_id = await self._persist(value)
        elif is_json:
            logger.info("Assistant reply is JSON but carries no report marker; not stored")
        else:
            logger.warning(f"Assistant reply is not JSON ({len(reply.text)} chars)")

        return GenerateReportData(
            response=json.dumps(value, indent=2, ensure_ascii=False) if is_json else reply.text,
            response_id=response_id,
            is_json=is_json,
            parsed_response=value if is_json else None,
        )

    async def _persist(self, report: Dict[str, Any]) -> Optional[str]:
        """Store the report; failures are logged and the report goes unsaved."""
        try:
            return await run_in_threadpool(self.repository.insert, report)
        except Exception as e:
            logger.error(f"Report save failed: {e}")
            return None

    async def get_report(self, report_id: str) -> Dict[str, Any]:
        """Stored report plus the viewer sections it can show."""
        report = await run_in_threadpool(self.repository.get, report_id)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        return {"report": report, "sections": available_sections(report)}

    async def build_pdf(self, report: Optional[Dict[str, Any]]) -> Tuple[bytes, str]:
        """Render a report to PDF; returns the bytes and the attachment filename."""
        if report is None:
            raise ValidationError("Report data is required", field="report")

        html = render_report_html(report)
        pdf = await run_in_threadpool(self.renderer.render, html)
        return pdf, report_filename(self.app_config.brand)

    async def send_email(
        self,
        to: Optional[str],
        report: Optional[Dict[str, Any]],
        subject: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        """
        Email a report as a PDF attachment.

        Returns:
            Message-ID of the delivered email
        """
        if not to or "@" not in to:
            raise ValidationError("Valid recipient email is required", field="to")
        if report is None:
            raise ValidationError("Report data is required", field="report")
        if not self.mailer.config.is_complete:
            raise ConfigurationError("SMTP configuration missing", component="smtp")

        pdf, filename = await self.build_pdf(report)
        bodies = render_email_bodies(report, self.app_config.brand, message)

        return await run_in_threadpool(
            self.mailer.send,
            to,
            subject,
            bodies["text"],
            bodies["html"],
            pdf,
            filename,
        )
