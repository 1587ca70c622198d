"""
Custom Exception Hierarchy

Every error raised on purpose by the service derives from IntakeReportError
and knows its HTTP status, so the API layer can turn it into the uniform
``{"success": false, "error": ...}`` envelope.
"""
from typing import Optional, Dict, Any


class IntakeReportError(Exception):
    """Base exception for all intake/report errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API error envelope."""
        body: Dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(IntakeReportError):
    """A request is missing a required field or carries an invalid one."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field


class NotFoundError(IntakeReportError):
    """A requested resource does not exist."""

    status_code = 404

    def __init__(self, message: str, resource: str = "report"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            details={"resource": resource}
        )
        self.resource = resource


class ConfigurationError(IntakeReportError):
    """A collaborator cannot be used because its settings are missing."""

    def __init__(self, message: str, component: str = "unknown"):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details={"component": component}
        )
        self.component = component


class AssistantError(IntakeReportError):
    """The hosted assistant returned something unusable or the run failed."""

    def __init__(
        self,
        message: str,
        run_status: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        extra = {"run_status": run_status} if run_status else {}
        super().__init__(
            message=message,
            code="ASSISTANT_ERROR",
            details={**extra, **(details or {})}
        )
        self.run_status = run_status


class AssistantTimeoutError(AssistantError):
    """The run did not complete within the polling bound."""

    def __init__(self, polls: int):
        super().__init__(
            message="Assistant run timed out",
            run_status="timeout",
            details={"polls": polls}
        )
        self.code = "ASSISTANT_TIMEOUT"
        self.polls = polls


class StorageError(IntakeReportError):
    """Errors while persisting or loading a report."""

    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
            details={"operation": operation, **(details or {})}
        )
        self.operation = operation


class ReportRenderError(IntakeReportError):
    """Errors while turning a report into HTML or PDF."""

    def __init__(
        self,
        message: str,
        stage: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REPORT_ERROR",
            details={"stage": stage, **(details or {})}
        )
        self.stage = stage


class EmailDeliveryError(IntakeReportError):
    """The SMTP relay refused or dropped the message."""

    def __init__(self, message: str, recipient: Optional[str] = None):
        super().__init__(
            message=message,
            code="EMAIL_ERROR",
            details={"recipient": recipient} if recipient else None
        )
        self.recipient = recipient
