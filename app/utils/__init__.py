"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    IntakeReportError,
    ValidationError,
    NotFoundError,
    ConfigurationError,
    AssistantError,
    AssistantTimeoutError,
    StorageError,
    ReportRenderError,
    EmailDeliveryError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "IntakeReportError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "AssistantError",
    "AssistantTimeoutError",
    "StorageError",
    "ReportRenderError",
    "EmailDeliveryError",
]
