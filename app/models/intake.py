"""
Intake Form Models

Mirror the camelCase payload the intake form posts. Unknown keys are kept so
that the assistant sees exactly what the patient submitted.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class MovementAssessment(_CamelModel):
    """One recorded guided-movement assessment."""
    movement_name: str = ""
    impact: str = ""
    tightness_areas: List[str] = Field(default_factory=list)
    sensations: List[str] = Field(default_factory=list)


class IntakeForm(_CamelModel):
    """Biomechanical self-assessment collected by the seven intake sections."""

    # Section 1 - basic information
    name: str = ""
    email: str = ""
    phone_number: str = ""
    age: str = ""
    sex_at_birth: str = ""
    height: str = ""
    weight: str = ""

    # Section 2 - primary discomfort
    primary_discomfort_area: str = ""
    primary_intensity: float = 5
    primary_duration: str = ""
    primary_behavior: str = ""

    # Section 3 - secondary discomfort
    has_other_discomfort: str = ""
    secondary_discomfort_area: str = ""
    secondary_intensity: float = 5
    secondary_duration: str = ""
    secondary_behavior: str = ""

    # Section 4 - guided movement
    selected_movement: str = ""
    manual_movement: str = ""
    movement_impact: str = ""
    movement_tightness_areas: List[str] = Field(default_factory=list)
    sensation_description: List[str] = Field(default_factory=list)
    sensation_travels: str = ""
    sensation_travel_area: str = ""
    front_hip_tightness: str = ""
    recorded_assessments: List[MovementAssessment] = Field(default_factory=list)

    # Section 5 - daily load
    activity_ranks: Dict[str, float] = Field(default_factory=dict)
    end_of_day_fatigue_area: str = ""

    # Section 6 - sleep & recovery
    sleep_position: str = ""
    sleep_impact: str = ""
    morning_stiffness_area: str = ""

    # Section 7 - aggravating & easing factors
    worsening_situations: List[str] = Field(default_factory=list)
    harder_position: str = ""
    improving_situations: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``: a free-text prompt or a full intake form."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    input: Optional[str] = None
    form_data: Optional[Dict[str, Any]] = Field(default=None, alias="formData")
