"""
HTML Report Builder

Renders a diagnostic report (and the accompanying email) from Jinja2
templates. Every value coming from the assistant is autoescaped.
"""
import json
from datetime import date
from typing import Any, Dict, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from app.utils import ReportRenderError, get_logger

from .sections import (
    GENERIC_SECTIONS_AFTER_QUESTIONS,
    GENERIC_SECTIONS_BEFORE_HYPOTHESES,
    GENERIC_SECTIONS_BEFORE_MOBILITY,
    has_content,
    humanize_key,
)

logger = get_logger(__name__)

DEFAULT_BADGE = "DIAGNOSTIC REPORT"


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


_env = Environment(
    loader=PackageLoader("app.core.reports", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["humanize"] = humanize_key
_env.filters["as_text"] = _as_text
_env.filters["as_list"] = _as_list
_env.tests["content"] = has_content


def report_badge(report: Dict[str, Any]) -> str:
    """Header badge: the report type spelled out, or a generic label."""
    report_type = report.get("report_type")
    if not report_type:
        return DEFAULT_BADGE
    return str(report_type).replace("_", " ").upper()


def report_filename(brand: str, today: Optional[date] = None) -> str:
    """Attachment name such as ``Hydrawav3_Report_2026-10-18.pdf``."""
    today = today or date.today()
    return f"{brand}_Report_{today.isoformat()}.pdf"


def first_name(report: Dict[str, Any]) -> str:
    """Greeting name taken from the personal snapshot."""
    snapshot = report.get("personal_snapshot") or {}
    name = snapshot.get("name") if isinstance(snapshot, dict) else None
    if isinstance(name, str) and name.strip():
        return name.split(" ")[0]
    return "there"


def render_report_html(report: Dict[str, Any]) -> str:
    """
    Build the printable report document.

    Args:
        report: Report object as produced by the assistant

    Returns:
        Complete HTML document
    """
    if not isinstance(report, dict):
        raise ReportRenderError("Report data must be a JSON object", stage="html")

    snapshot = report.get("personal_snapshot")
    hypotheses = [
        ("A", report.get("kinetic_chain_hypothesis_a")),
        ("B", report.get("kinetic_chain_hypothesis_b")),
    ]

    template = _env.get_template("report.html")
    html = template.render(
        report=report,
        badge=report_badge(report),
        snapshot=snapshot if isinstance(snapshot, dict) and snapshot else None,
        sections_before_hypotheses=GENERIC_SECTIONS_BEFORE_HYPOTHESES,
        hypotheses=[(letter, h) for letter, h in hypotheses if isinstance(h, dict) and h],
        sections_before_mobility=GENERIC_SECTIONS_BEFORE_MOBILITY,
        sections_after_questions=GENERIC_SECTIONS_AFTER_QUESTIONS,
    )
    logger.debug(f"Rendered report HTML ({len(html)} chars)")
    return html


def render_email_bodies(
    report: Dict[str, Any],
    brand: str,
    custom_message: Optional[str] = None,
) -> Dict[str, str]:
    """Plain-text and HTML bodies of the report email."""
    context = {
        "name": first_name(report),
        "brand": brand,
        "custom_message": custom_message.strip() if custom_message and custom_message.strip() else None,
    }
    return {
        "html": _env.get_template("email.html").render(**context).strip(),
        "text": _env.get_template("email.txt").render(**context).strip(),
    }
