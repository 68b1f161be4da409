"""Session lifecycle handlers: launch and session end."""

from __future__ import annotations

from typing import TYPE_CHECKING

from health_companion.core.logging import get_logger
from health_companion.core.models import SpeechResponse
from health_companion.services.intent_router import IntentRequest
from health_companion.services.intents.simple_intents import SKILL_NAME

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from health_companion.services import ServiceContainer

logger = get_logger(__name__)

WELCOME_MESSAGE = (
    f"Welcome to {SKILL_NAME}. You can tell me your symptoms, and I will provide some basic "
    "information. What symptoms are you experiencing today?"
)


async def handle_launch(request: IntentRequest, services: "ServiceContainer") -> SpeechResponse:
    """Greet the user and ask for symptoms."""
    _ = request, services
    return SpeechResponse.ask(WELCOME_MESSAGE, WELCOME_MESSAGE)


async def handle_session_ended(
    request: IntentRequest, services: "ServiceContainer"
) -> SpeechResponse:
    """Log why Alexa closed the session; Alexa ignores any speech here."""
    _ = services
    envelope = request.envelope
    error = envelope.request.error
    logger.info(
        "Session ended: %s",
        envelope.model_dump_json(exclude_none=True),
        extra={
            "event": "session_ended",
            "reason": envelope.request.reason,
            "error_type": error.type if error else None,
            "error_message": error.message if error else None,
        },
    )
    return SpeechResponse.empty()


__all__ = ["WELCOME_MESSAGE", "handle_launch", "handle_session_ended"]
