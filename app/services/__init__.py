"""
Service layer: report flows and their external collaborators.
"""
from .mailer import ReportMailer
from .report_service import ReportService, merge_contact_fields
from .storage import ReportRepository

__all__ = [
    "ReportMailer",
    "ReportService",
    "ReportRepository",
    "merge_contact_fields",
]
