"""
Assistant Module

Talks to the hosted LLM assistant that writes the diagnostic report. The
assistant only sees the intake payload; everything it returns is treated as
untrusted text until parsed.
"""
from .client import AssistantClient, AssistantReply, NO_RESPONSE_TEXT
from .parsing import extract_input, is_report_like, try_parse_json

__all__ = [
    "AssistantClient",
    "AssistantReply",
    "NO_RESPONSE_TEXT",
    "extract_input",
    "is_report_like",
    "try_parse_json",
]
