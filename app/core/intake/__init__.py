"""
Intake Module
"""
from .progress import (
    SECTIONS,
    IntakeSection,
    completion_percent,
    has_movement_assessment,
    section_status,
)

__all__ = [
    "SECTIONS",
    "IntakeSection",
    "completion_percent",
    "has_movement_assessment",
    "section_status",
]
