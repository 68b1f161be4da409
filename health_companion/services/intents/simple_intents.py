"""Canned-text handlers: help, cancel/stop, fallback, and the catch-all error handler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from health_companion.core.logging import get_logger
from health_companion.core.models import SpeechResponse
from health_companion.services.intent_router import IntentRequest

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from health_companion.services import ServiceContainer

logger = get_logger(__name__)

SKILL_NAME = "Health Companion"

HELP_MESSAGE = (
    'You can tell me your symptoms by saying phrases like "I have a headache" or '
    "\"I'm experiencing fever and chills\". I'll provide some basic health information. "
    "How can I help you today?"
)

GOODBYE_MESSAGE = (
    f"Thank you for using {SKILL_NAME}. Remember, for serious health concerns, please consult "
    "with a healthcare professional. Goodbye!"
)

FALLBACK_MESSAGE = (
    "I'm sorry, I didn't understand that. You can tell me your symptoms by saying something "
    "like 'I have a headache' or 'I'm experiencing fever'. How can I help you?"
)

ERROR_MESSAGE = "Sorry, I had trouble processing your request. Please try again."


async def handle_help(request: IntentRequest, services: "ServiceContainer") -> SpeechResponse:
    """Explain how to use the skill."""
    _ = request, services
    return SpeechResponse.ask(HELP_MESSAGE, HELP_MESSAGE)


async def handle_cancel_or_stop(
    request: IntentRequest, services: "ServiceContainer"
) -> SpeechResponse:
    _ = request, services
    return SpeechResponse.tell(GOODBYE_MESSAGE)


async def handle_fallback(request: IntentRequest, services: "ServiceContainer") -> SpeechResponse:
    """Answer utterances that matched no known intent."""
    _ = services
    logger.info(
        "Fallback response for request type %s, intent %s.",
        request.envelope.request_type,
        request.envelope.intent_name,
    )
    return SpeechResponse.ask(FALLBACK_MESSAGE, FALLBACK_MESSAGE)


async def handle_error(request: IntentRequest, error: Exception) -> SpeechResponse:
    """Apologize after a handler raised; the session stays open for a retry."""
    logger.error(
        "Error handled while processing %s request: %s",
        request.kind.value,
        error,
        exc_info=error,
        extra={"event": "handler_error", "request_kind": request.kind.value},
    )
    return SpeechResponse.ask(ERROR_MESSAGE, ERROR_MESSAGE)


__all__ = [
    "ERROR_MESSAGE",
    "FALLBACK_MESSAGE",
    "GOODBYE_MESSAGE",
    "HELP_MESSAGE",
    "SKILL_NAME",
    "handle_cancel_or_stop",
    "handle_error",
    "handle_fallback",
    "handle_help",
]
