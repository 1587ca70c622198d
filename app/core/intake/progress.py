"""
Intake Progress

Tracks which of the seven intake sections a patient has finished. The
guided-movement section has its own rule: one recorded (or current)
movement assessment plus the front-hip answer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from app.models.intake import IntakeForm

GUIDED_MOVEMENT_SECTION = 4


@dataclass(frozen=True)
class IntakeSection:
    id: int
    title: str
    fields: List[str] = field(default_factory=list)


SECTIONS: List[IntakeSection] = [
    IntakeSection(1, "Basic Information", ["age", "sex_at_birth", "height", "weight"]),
    IntakeSection(2, "Primary Discomfort", [
        "primary_discomfort_area", "primary_intensity", "primary_duration", "primary_behavior",
    ]),
    IntakeSection(3, "Secondary Discomfort", ["has_other_discomfort"]),
    IntakeSection(GUIDED_MOVEMENT_SECTION, "Guided Movement", [
        "selected_movement", "movement_impact", "front_hip_tightness",
    ]),
    IntakeSection(5, "Daily Load", ["activity_ranks", "end_of_day_fatigue_area"]),
    IntakeSection(6, "Sleep & Recovery", ["sleep_position", "sleep_impact", "morning_stiffness_area"]),
    IntakeSection(7, "Aggravating & Easing Factors", [
        "worsening_situations", "harder_position", "improving_situations",
    ]),
]

SECONDARY_FIELDS = [
    "secondary_discomfort_area", "secondary_intensity", "secondary_duration", "secondary_behavior",
]


def _is_filled(value: Any) -> bool:
    if isinstance(value, str):
        return len(value.strip()) > 0
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return value is not None


def has_movement_assessment(form: IntakeForm) -> bool:
    """At least one guided movement was recorded or is fully entered."""
    if form.recorded_assessments:
        return True
    movement = form.selected_movement or form.manual_movement
    return bool(movement and movement.strip() and form.movement_impact)


def _section_complete(section: IntakeSection, form: IntakeForm) -> bool:
    if section.id == GUIDED_MOVEMENT_SECTION:
        return has_movement_assessment(form) and bool(form.front_hip_tightness)

    fields = list(section.fields)
    if section.id == 3 and form.has_other_discomfort.strip().lower() == "yes":
        fields += SECONDARY_FIELDS

    return all(_is_filled(getattr(form, name)) for name in fields)


def section_status(form: IntakeForm) -> List[Dict[str, Any]]:
    """Completion flag for every section, in display order."""
    return [
        {"id": section.id, "title": section.title, "isComplete": _section_complete(section, form)}
        for section in SECTIONS
    ]


def completion_percent(form: IntakeForm) -> int:
    statuses = section_status(form)
    completed = sum(1 for status in statuses if status["isComplete"])
    return round(completed / len(SECTIONS) * 100)
