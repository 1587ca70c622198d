"""
API and Document Models
"""
from .intake import ChatRequest, IntakeForm, MovementAssessment
from .report import (
    GeneratePdfRequest,
    GenerateReportData,
    GenerateReportResponse,
    HealthResponse,
    ReportDocument,
    ReportSection,
    SendEmailRequest,
    SendEmailResponse,
    StoredReportResponse,
)

__all__ = [
    "ChatRequest",
    "IntakeForm",
    "MovementAssessment",
    "GeneratePdfRequest",
    "GenerateReportData",
    "GenerateReportResponse",
    "HealthResponse",
    "ReportDocument",
    "ReportSection",
    "SendEmailRequest",
    "SendEmailResponse",
    "StoredReportResponse",
]
