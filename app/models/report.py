"""
Report Document and API Models

The report is whatever JSON the assistant produced. Only ``schema_version``
and ``report_type`` are required; every section is free-form and unknown
keys are stored untouched.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportDocument(BaseModel):
    """
    A diagnostic report as stored in the document database.

    Sections may arrive as ``null``; a lone question string is stored as a
    one-item list.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    schema_version: str
    report_type: str
    personal_snapshot: Optional[Dict[str, Any]] = Field(default_factory=dict)
    clinical_insight_snapshot: Any = Field(default_factory=dict)
    movement_observations: Any = Field(default_factory=dict)
    kinetic_chain_hypothesis_a: Any = Field(default_factory=dict)
    kinetic_chain_hypothesis_b: Any = Field(default_factory=dict)
    load_vs_recovery_overview: Any = Field(default_factory=dict)
    lifestyle_and_postural_contributors: Any = Field(default_factory=dict)
    at_home_mobility_focus: Any = Field(default_factory=dict)
    why_this_pattern_matters: Any = Field(default_factory=dict)
    questions_to_ask_your_practitioner: Optional[List[Any]] = Field(default_factory=list)
    practitioner_hand_off_summary: Any = Field(default_factory=dict)
    next_steps_and_recovery_tools: Any = Field(default_factory=dict)
    practitioner_notes: Any = Field(default_factory=dict)
    disclaimer: Optional[str] = ""

    @field_validator("questions_to_ask_your_practitioner", mode="before")
    @classmethod
    def _wrap_single_question(cls, value: Any) -> Any:
        if value is None or isinstance(value, (list, tuple)):
            return value
        return [value]


# ---- API payloads ----

class GenerateReportData(BaseModel):
    """``data`` block of a successful ``POST /api/chat``."""
    response: str
    response_id: Optional[str] = None
    is_json: bool
    parsed_response: Optional[Any] = None


class GenerateReportResponse(BaseModel):
    success: bool = True
    message: str = "Response generated successfully"
    data: GenerateReportData


class GeneratePdfRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    report: Optional[Dict[str, Any]] = None


class SendEmailRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    to: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    report: Optional[Dict[str, Any]] = None


class SendEmailResponse(BaseModel):
    success: bool = True
    message: str = "Email sent successfully"
    messageId: str


class ReportSection(BaseModel):
    """Viewer navigation entry."""
    id: str
    title: str
    icon: str
    key: str


class StoredReportResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]
    sections: List[ReportSection]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    services: Dict[str, str] = Field(default_factory=dict)
    details: Optional[Dict[str, Any]] = None
