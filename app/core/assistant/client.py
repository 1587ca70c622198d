"""
Hosted Assistant Client

Wrapper around the OpenAI Assistants API (threads and runs). One call to
``run`` is one conversation: create a thread, post the intake as a user
message, start a run against the configured assistant, poll it to a
terminal state and read back the assistant's reply.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from app.config import AssistantConfig
from app.utils import (
    AssistantError,
    AssistantTimeoutError,
    ConfigurationError,
    get_logger,
)

logger = get_logger(__name__)

NO_RESPONSE_TEXT = "No response generated"

FAILED_STATUSES = frozenset({"failed", "cancelled", "expired"})


@dataclass
class AssistantReply:
    """Outcome of one assistant run."""
    text: str
    thread_id: str
    run_id: str
    polls: int = 0
    latency_ms: float = 0.0


class AssistantClient:
    """
    Client for the hosted report assistant.

    The underlying ``AsyncOpenAI`` client is built lazily so the service can
    start (and answer health checks) without credentials.
    """

    def __init__(
        self,
        config: Optional[AssistantConfig] = None,
        client: Optional[Any] = None,
    ):
        self.config = config or AssistantConfig()
        self._client = client
        self._run_count = 0
        self._last_run_time: Optional[datetime] = None

    @property
    def is_available(self) -> bool:
        """Credentials and an assistant id are configured (or a client was injected)."""
        has_auth = self._client is not None or bool(self.config.api_key)
        return has_auth and bool(self.config.assistant_id)

    def _get_client(self) -> Any:
        if not self.config.api_key and self._client is None:
            raise ConfigurationError("OPENAI_API_KEY is not configured", component="assistant")
        if not self.config.assistant_id:
            raise ConfigurationError("OPENAI_ASSISTANT_ID is not configured", component="assistant")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.config.api_key,
                timeout=self.config.request_timeout_seconds,
            )
        return self._client

    async def run(self, input_text: str) -> AssistantReply:
        """
        Send ``input_text`` to the assistant and wait for its reply.

        Raises:
            ConfigurationError: credentials or assistant id missing
            AssistantError: invalid ids, or the run failed/was cancelled/expired
            AssistantTimeoutError: the run did not complete within ``max_polls``
        """
        client = self._get_client()
        start_time = datetime.now()

        thread = await client.beta.threads.create()
        thread_id = getattr(thread, "id", None)
        if not thread_id or not thread_id.startswith("thread_"):
            raise AssistantError("Invalid thread ID received from OpenAI")

        await client.beta.threads.messages.create(
            thread_id,
            role="user",
            content=input_text,
        )

        run = await client.beta.threads.runs.create(
            thread_id=thread_id,
            assistant_id=self.config.assistant_id,
        )
        run_id = getattr(run, "id", None)
        if not run_id or not run_id.startswith("run_"):
            raise AssistantError("Invalid run ID received from OpenAI")

        logger.info(f"Assistant run {run_id} started on {thread_id}")
        polls = await self._wait_for_completion(client, thread_id, run_id, run.status)

        text = await self._first_assistant_text(client, thread_id)

        self._run_count += 1
        self._last_run_time = datetime.now()
        latency = (self._last_run_time - start_time).total_seconds() * 1000
        logger.info(f"Assistant run {run_id} completed after {polls} polls ({latency:.0f} ms)")

        return AssistantReply(
            text=text,
            thread_id=thread_id,
            run_id=run_id,
            polls=polls,
            latency_ms=latency,
        )

    async def _wait_for_completion(
        self,
        client: Any,
        thread_id: str,
        run_id: str,
        status: str,
    ) -> int:
        """Poll the run at a fixed interval until it completes; return the poll count."""
        polls = 0
        while status != "completed" and polls < self.config.max_polls:
            await asyncio.sleep(self.config.poll_interval_seconds)
            polls += 1

            updated = await client.beta.threads.runs.retrieve(run_id, thread_id=thread_id)
            status = updated.status

            if status in FAILED_STATUSES:
                last_error = getattr(updated, "last_error", None)
                reason = getattr(last_error, "message", None) or "Unknown error"
                logger.error(f"Assistant run {run_id} {status}: {reason}")
                raise AssistantError(f"Assistant run {status}: {reason}", run_status=status)

        if status != "completed":
            logger.error(f"Assistant run {run_id} still '{status}' after {polls} polls")
            raise AssistantTimeoutError(polls)

        return polls

    @staticmethod
    async def _first_assistant_text(client: Any, thread_id: str) -> str:
        """Text of the first assistant-authored message (newest first), if any."""
        messages = await client.beta.threads.messages.list(thread_id)

        for message in messages.data:
            if message.role != "assistant":
                continue
            content = message.content[0] if message.content else None
            if content is not None and content.type == "text":
                return content.text.value
            return NO_RESPONSE_TEXT

        return NO_RESPONSE_TEXT

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        return {
            "is_available": self.is_available,
            "assistant_id": self.config.assistant_id,
            "run_count": self._run_count,
            "last_run": self._last_run_time.isoformat() if self._last_run_time else None,
        }
