"""
Assistant input/output helpers.
"""
import json
from typing import Any, Mapping, Tuple

from app.utils import ValidationError

REPORT_MARKERS = ("schema_version", "report_type")


def extract_input(body: Mapping[str, Any]) -> str:
    """
    Pick the text to send to the assistant.

    A non-blank ``input`` wins; otherwise the intake ``formData`` is sent as
    pretty-printed JSON.
    """
    text = body.get("input")
    if isinstance(text, str) and text.strip():
        return text.strip()

    form_data = body.get("formData")
    if form_data:
        return json.dumps(form_data, indent=2, ensure_ascii=False)

    raise ValidationError("Missing input to send to AI", field="input")


def try_parse_json(text: str) -> Tuple[bool, Any]:
    """
    Decode an assistant reply.

    Returns ``(True, value)`` for valid JSON, including JSON that was
    encoded twice and arrives as a quoted string, else ``(False, text)``.
    """
    try:
        clean = text.strip()
        if len(clean) >= 2 and clean[0] == clean[-1] and clean[0] in ('"', "'"):
            clean = json.loads(clean)
        return True, json.loads(clean)
    except (TypeError, ValueError):
        return False, text


def is_report_like(is_json: bool, value: Any) -> bool:
    """A decoded object carrying a report marker."""
    if not is_json or not isinstance(value, dict):
        return False
    return any(value.get(marker) for marker in REPORT_MARKERS)
