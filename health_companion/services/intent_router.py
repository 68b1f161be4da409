"""Intent router: classifies Alexa envelopes and dispatches them to handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Mapping, MutableMapping, Optional

from health_companion.core.intents import (
    INTENT_KINDS,
    INTENT_REQUEST,
    LAUNCH_REQUEST,
    SESSION_ENDED_REQUEST,
    RequestKind,
)
from health_companion.core.logging import get_logger
from health_companion.core.models import RequestEnvelope, SpeechResponse

if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from . import ServiceContainer

logger = get_logger(__name__)


@dataclass(slots=True)
class IntentRequest:
    """A classified envelope handed to exactly one handler."""

    kind: RequestKind
    envelope: RequestEnvelope


IntentHandler = Callable[[IntentRequest, "ServiceContainer"], Awaitable[SpeechResponse]]
ErrorHandler = Callable[[IntentRequest, Exception], Awaitable[SpeechResponse]]


class IntentRouterError(RuntimeError):
    """Base error for router failures."""


class IntentHandlerNotFoundError(IntentRouterError):
    """Raised when no handler is registered for the classified request kind."""


def classify(envelope: RequestEnvelope) -> RequestKind:
    """Map an envelope onto the closed set of request kinds.

    Unknown intent names and unknown request types both classify as
    ``FALLBACK`` so every envelope has exactly one owner.
    """
    request_type = envelope.request_type
    if request_type == LAUNCH_REQUEST:
        return RequestKind.LAUNCH
    if request_type == SESSION_ENDED_REQUEST:
        return RequestKind.SESSION_ENDED
    if request_type == INTENT_REQUEST:
        intent_name = envelope.intent_name
        if intent_name is not None and intent_name in INTENT_KINDS:
            return INTENT_KINDS[intent_name]
        logger.info("Unrecognized intent %s routed to fallback.", intent_name)
        return RequestKind.FALLBACK
    logger.info("Unsupported request type %s routed to fallback.", request_type)
    return RequestKind.FALLBACK


class IntentRouter:
    """Dispatch classified envelopes to registered handlers."""

    def __init__(
        self,
        handlers: Mapping[RequestKind, IntentHandler] | None = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self._handlers: MutableMapping[RequestKind, IntentHandler] = dict(handlers or {})
        self.error_handler = error_handler

    def register(self, kind: RequestKind, handler: IntentHandler) -> None:
        """Register or replace a handler for ``kind``."""

        self._handlers[kind] = handler

    def unregister(self, kind: RequestKind) -> None:
        """Remove a handler if present."""

        self._handlers.pop(kind, None)

    def handlers(self) -> Mapping[RequestKind, IntentHandler]:
        """Return a shallow copy of the current handler registry."""

        return dict(self._handlers)

    def missing_kinds(self) -> list[RequestKind]:
        """Return the request kinds that have no registered handler."""

        return [kind for kind in RequestKind if kind not in self._handlers]

    async def dispatch(
        self, envelope: RequestEnvelope, services: "ServiceContainer"
    ) -> SpeechResponse:
        """Classify ``envelope`` and invoke the matching handler.

        Exceptions raised by the handler are routed to ``error_handler``; a
        missing registration is a wiring bug and propagates.
        """

        request = IntentRequest(kind=classify(envelope), envelope=envelope)
        try:
            handler = self._handlers[request.kind]
        except KeyError as exc:
            raise IntentHandlerNotFoundError(
                f"No handler registered for request kind {request.kind.value}"
            ) from exc

        try:
            return await handler(request, services)
        except Exception as exc:  # pylint: disable=broad-except
            if self.error_handler is None:
                raise
            return await self.error_handler(request, exc)


def register_default_handlers(router: IntentRouter) -> IntentRouter:
    """Wire every request kind, plus the catch-all error handler, onto ``router``."""

    # pylint: disable=import-outside-toplevel
    from .intents.session_intents import handle_launch, handle_session_ended
    from .intents.simple_intents import (
        handle_cancel_or_stop,
        handle_error,
        handle_fallback,
        handle_help,
    )
    from .intents.symptom_intents import handle_multiple_symptoms, handle_symptom

    router.register(RequestKind.LAUNCH, handle_launch)
    router.register(RequestKind.SYMPTOM, handle_symptom)
    router.register(RequestKind.MULTIPLE_SYMPTOMS, handle_multiple_symptoms)
    router.register(RequestKind.HELP, handle_help)
    router.register(RequestKind.CANCEL_OR_STOP, handle_cancel_or_stop)
    router.register(RequestKind.FALLBACK, handle_fallback)
    router.register(RequestKind.SESSION_ENDED, handle_session_ended)
    router.error_handler = handle_error
    return router


__all__ = [
    "ErrorHandler",
    "IntentHandler",
    "IntentHandlerNotFoundError",
    "IntentRequest",
    "IntentRouter",
    "IntentRouterError",
    "classify",
    "register_default_handlers",
]
