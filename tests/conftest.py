"""
Pytest Configuration and Fixtures

Shared fixtures for the intake/report service tests: sample intake data,
sample assistant reports and fakes for the OpenAI client, report store,
PDF renderer and mailer.
"""
import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

# Add app to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import AppConfig, AssistantConfig, SmtpConfig
from app.core.assistant import AssistantClient
from app.services import ReportMailer, ReportRepository, ReportService


def make_openai_client(
    reply_text: Optional[str] = "{}",
    statuses: Iterable[str] = ("completed",),
    thread_id: str = "thread_test123",
    run_id: str = "run_test123",
    initial_status: str = "queued",
    last_error: Any = None,
    messages: Optional[list] = None,
) -> MagicMock:
    """Fake ``AsyncOpenAI`` exposing the Assistants API surface used by the client."""
    client = MagicMock()
    client.beta.threads.create = AsyncMock(return_value=SimpleNamespace(id=thread_id))
    client.beta.threads.messages.create = AsyncMock(return_value=SimpleNamespace(id="msg_user"))
    client.beta.threads.runs.create = AsyncMock(
        return_value=SimpleNamespace(id=run_id, status=initial_status)
    )
    client.beta.threads.runs.retrieve = AsyncMock(
        side_effect=[SimpleNamespace(status=s, last_error=last_error) for s in statuses]
    )

    if messages is None:
        messages = []
        if reply_text is not None:
            messages.append(assistant_message(reply_text))
        messages.append(SimpleNamespace(
            role="user",
            content=[SimpleNamespace(type="text", text=SimpleNamespace(value="intake"))],
        ))
    client.beta.threads.messages.list = AsyncMock(return_value=SimpleNamespace(data=messages))
    return client


def assistant_message(text: str) -> SimpleNamespace:
    return SimpleNamespace(
        role="assistant",
        content=[SimpleNamespace(type="text", text=SimpleNamespace(value=text))],
    )


def make_assistant(openai_client: MagicMock, max_polls: int = 5) -> AssistantClient:
    config = AssistantConfig(
        api_key="sk-test",
        assistant_id="asst_test",
        poll_interval_seconds=0,
        max_polls=max_polls,
    )
    return AssistantClient(config=config, client=openai_client)


@pytest.fixture
def sample_form_data() -> Dict[str, Any]:
    """Intake form as posted by the frontend."""
    return {
        "name": "Jordan Rivera",
        "email": "jordan@example.com",
        "phoneNumber": "+15550001111",
        "age": "34",
        "sexAtBirth": "female",
        "height": "170",
        "weight": "64",
        "primaryDiscomfortArea": "lower back",
        "primaryIntensity": 6,
        "primaryDuration": "3 months",
        "primaryBehavior": "worse after sitting",
        "hasOtherDiscomfort": "no",
        "selectedMovement": "deep squat",
        "movementImpact": "moderate",
        "movementTightnessAreas": ["hips"],
        "sensationDescription": ["pulling"],
        "frontHipTightness": "right",
        "recordedAssessments": [],
        "activityRanks": {"sitting": 1, "running": 2},
        "endOfDayFatigueArea": "lower back",
        "sleepPosition": "side",
        "sleepImpact": "wakes once",
        "morningStiffnessArea": "hips",
        "worseningSituations": ["long drives"],
        "harderPosition": "sitting",
        "improvingSituations": ["walking"],
    }


@pytest.fixture
def sample_report() -> Dict[str, Any]:
    """Report object as returned by the assistant."""
    return {
        "schema_version": "1.2",
        "report_type": "general_mobility_kinetic_chain",
        "personal_snapshot": {"age": "34", "primary_concern": "Lower back tightness"},
        "clinical_insight_snapshot": {
            "summary": "Load concentrates in the lumbar region during flexion.",
            "key_findings": ["Limited hip extension", "Compensatory lumbar flexion"],
        },
        "movement_observations": ["Squat depth limited", {"side": "right", "note": "hip shift"}],
        "kinetic_chain_hypothesis_a": {
            "hypothesis_label": "Hip-driven lumbar overload",
            "initiating_region": "Right hip flexors",
            "kinetic_chain_pathway": ["Hip flexors", "Pelvis", "Lumbar spine"],
            "biomechanical_explanation": "Short hip flexors tilt the pelvis forward.",
            "supporting_findings": ["Front hip tightness on the right"],
        },
        "kinetic_chain_hypothesis_b": {},
        "at_home_mobility_focus": {
            "focus_regions": ["Hips", "Thoracic spine"],
            "mobility_themes": ["Hip extension", "Breathing-led bracing"],
        },
        "why_this_pattern_matters": "Unaddressed, the pattern keeps loading the lower back.",
        "questions_to_ask_your_practitioner": [
            "Could my hip mobility explain my back pain?",
            "Which movements should I avoid for now?",
        ],
        "practitioner_hand_off_summary": {},
        "disclaimer": "Educational use only; not a medical diagnosis.",
    }


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(brand="Hydrawav3", cors_origins=["*"], log_level="INFO", log_file=None)


@pytest.fixture
def smtp_config() -> SmtpConfig:
    return SmtpConfig(
        host="smtp.example.com",
        port=587,
        username="reports@example.com",
        password="secret",
        from_email="reports@example.com",
    )


@pytest.fixture
def fake_repository() -> MagicMock:
    repository = MagicMock(spec=ReportRepository)
    repository.insert.return_value = str(ObjectId())
    repository.get.return_value = None
    repository.is_configured = True
    return repository


@pytest.fixture
def fake_renderer() -> MagicMock:
    renderer = MagicMock()
    renderer.render.return_value = b"%PDF-1.7 fake"
    return renderer


@pytest.fixture
def fake_mailer(smtp_config) -> MagicMock:
    mailer = MagicMock(spec=ReportMailer)
    mailer.config = smtp_config
    mailer.send.return_value = "<abc123@example.com>"
    return mailer


@pytest.fixture
def build_service(fake_repository, fake_renderer, fake_mailer, app_config):
    """Factory: ReportService around a fake OpenAI client replying ``reply_text``."""
    def _build(openai_client: Optional[MagicMock] = None, max_polls: int = 5) -> ReportService:
        client = openai_client or make_openai_client(reply_text=json.dumps({"ok": True}))
        return ReportService(
            assistant=make_assistant(client, max_polls=max_polls),
            repository=fake_repository,
            renderer=fake_renderer,
            mailer=fake_mailer,
            app_config=app_config,
        )
    return _build


@pytest.fixture
def fake_openai():
    """Factory for fake OpenAI clients (see ``make_openai_client``)."""
    return make_openai_client


@pytest.fixture
def assistant_for():
    """Factory: AssistantClient with zero poll interval around a fake client."""
    return make_assistant


@pytest.fixture
def text_message():
    return assistant_message
