"""Core data transfer objects shared across layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from health_companion.core.intents import INTENT_REQUEST


@dataclass(slots=True)
class RequestContext:
    """Metadata describing an inbound API request."""

    correlation_id: str
    path: str
    method: str
    user_agent: Optional[str] = None


class AlexaModel(BaseModel):
    """Base for inbound Alexa payload models; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class AlexaSlot(AlexaModel):
    """Alexa slot value."""

    name: Optional[str] = None
    value: Optional[str] = None


class AlexaIntent(AlexaModel):
    """Alexa intent with slots."""

    name: str
    slots: dict[str, AlexaSlot] = Field(default_factory=dict)


class AlexaRequestError(AlexaModel):
    """Error details attached to a SessionEndedRequest."""

    type: Optional[str] = None
    message: Optional[str] = None


class AlexaRequest(AlexaModel):
    """The ``request`` block of an Alexa envelope."""

    type: str
    requestId: Optional[str] = None
    timestamp: Optional[datetime] = None
    locale: str = "en-US"
    intent: Optional[AlexaIntent] = None
    reason: Optional[str] = None
    error: Optional[AlexaRequestError] = None


class AlexaApplication(AlexaModel):
    applicationId: str


class AlexaUser(AlexaModel):
    userId: str


class AlexaSession(AlexaModel):
    """Alexa session information."""

    sessionId: str
    new: bool = False
    application: Optional[AlexaApplication] = None
    user: Optional[AlexaUser] = None
    attributes: dict[str, Any] = Field(default_factory=dict)


class RequestEnvelope(AlexaModel):
    """Full Alexa request envelope as posted to the skill endpoint."""

    version: str = "1.0"
    session: Optional[AlexaSession] = None
    context: dict[str, Any] = Field(default_factory=dict)
    request: AlexaRequest

    @property
    def request_type(self) -> str:
        return self.request.type

    @property
    def intent_name(self) -> Optional[str]:
        """Intent name for IntentRequests, ``None`` for every other request type."""
        if self.request.type != INTENT_REQUEST or self.request.intent is None:
            return None
        return self.request.intent.name

    @property
    def session_id(self) -> Optional[str]:
        return self.session.sessionId if self.session else None

    def slot_value(self, name: str) -> Optional[str]:
        """Return the value of slot ``name`` exactly as Alexa sent it.

        Missing intents, missing slots, and missing or empty values all yield
        ``None`` so callers can treat "absent" as a single explicit state.
        """
        intent = self.request.intent
        if intent is None:
            return None
        slot = intent.slots.get(name)
        if slot is None or not slot.value:
            return None
        return slot.value

    def application_id(self) -> Optional[str]:
        """Return the skill application id from the session or the system context."""
        if self.session and self.session.application:
            return self.session.application.applicationId
        system = self.context.get("System")
        if isinstance(system, dict):
            application = system.get("application")
            if isinstance(application, dict):
                app_id = application.get("applicationId")
                if isinstance(app_id, str):
                    return app_id
        return None

    def age(self, now: Optional[datetime] = None) -> Optional[float]:
        """Return the request age in seconds, or ``None`` when no timestamp was sent."""
        timestamp = self.request.timestamp
        if timestamp is None:
            return None
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        current = now or datetime.now(timezone.utc)
        return (current - timestamp).total_seconds()


@dataclass(frozen=True, slots=True)
class SpeechResponse:
    """Spoken result produced by exactly one handler per request."""

    speech: Optional[str] = None
    reprompt: Optional[str] = None
    should_end_session: bool = True

    @classmethod
    def ask(cls, speech: str, reprompt: str) -> "SpeechResponse":
        """Speak ``speech`` and keep the session open waiting on ``reprompt``."""
        return cls(speech=speech, reprompt=reprompt, should_end_session=False)

    @classmethod
    def tell(cls, speech: str) -> "SpeechResponse":
        """Speak ``speech`` and end the session."""
        return cls(speech=speech, reprompt=None, should_end_session=True)

    @classmethod
    def empty(cls) -> "SpeechResponse":
        return cls()


class OutputSpeech(BaseModel):
    """Alexa speech output."""

    type: str = "PlainText"
    text: str


class Reprompt(BaseModel):
    outputSpeech: OutputSpeech


class ResponseBody(BaseModel):
    """Alexa response body."""

    outputSpeech: Optional[OutputSpeech] = None
    reprompt: Optional[Reprompt] = None
    shouldEndSession: bool = True


class ResponseEnvelope(BaseModel):
    """Full Alexa response envelope."""

    version: str = "1.0"
    sessionAttributes: dict[str, Any] = Field(default_factory=dict)
    response: ResponseBody

    @classmethod
    def from_speech(cls, speech: SpeechResponse) -> "ResponseEnvelope":
        body = ResponseBody(shouldEndSession=speech.should_end_session)
        if speech.speech is not None:
            body.outputSpeech = OutputSpeech(text=speech.speech)
        if speech.reprompt is not None:
            body.reprompt = Reprompt(outputSpeech=OutputSpeech(text=speech.reprompt))
        return cls(response=body)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body Alexa expects, omitting absent blocks."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "RequestContext",
    "AlexaSlot",
    "AlexaIntent",
    "AlexaRequest",
    "AlexaRequestError",
    "AlexaSession",
    "RequestEnvelope",
    "SpeechResponse",
    "OutputSpeech",
    "Reprompt",
    "ResponseBody",
    "ResponseEnvelope",
]
