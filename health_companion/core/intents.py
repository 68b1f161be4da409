"""Request kinds and Alexa intent names recognized by the skill."""

from enum import Enum

LAUNCH_REQUEST = "LaunchRequest"
INTENT_REQUEST = "IntentRequest"
SESSION_ENDED_REQUEST = "SessionEndedRequest"

SYMPTOM_INTENT = "SymptomIntent"
MULTIPLE_SYMPTOM_INTENT = "MultipleSymptomIntent"
HELP_INTENT = "AMAZON.HelpIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"
STOP_INTENT = "AMAZON.StopIntent"
FALLBACK_INTENT = "AMAZON.FallbackIntent"

SYMPTOM_SLOT = "symptom"
SYMPTOMS_SLOT = "symptoms"


class RequestKind(str, Enum):
    """Closed set of request kinds an inbound envelope classifies into."""

    LAUNCH = "launch"
    SYMPTOM = "symptom"
    MULTIPLE_SYMPTOMS = "multiple-symptoms"
    HELP = "help"
    CANCEL_OR_STOP = "cancel-or-stop"
    FALLBACK = "fallback"
    SESSION_ENDED = "session-ended"


INTENT_KINDS: dict[str, RequestKind] = {
    SYMPTOM_INTENT: RequestKind.SYMPTOM,
    MULTIPLE_SYMPTOM_INTENT: RequestKind.MULTIPLE_SYMPTOMS,
    HELP_INTENT: RequestKind.HELP,
    CANCEL_INTENT: RequestKind.CANCEL_OR_STOP,
    STOP_INTENT: RequestKind.CANCEL_OR_STOP,
    FALLBACK_INTENT: RequestKind.FALLBACK,
}


__all__ = [
    "RequestKind",
    "INTENT_KINDS",
    "LAUNCH_REQUEST",
    "INTENT_REQUEST",
    "SESSION_ENDED_REQUEST",
    "SYMPTOM_INTENT",
    "MULTIPLE_SYMPTOM_INTENT",
    "HELP_INTENT",
    "CANCEL_INTENT",
    "STOP_INTENT",
    "FALLBACK_INTENT",
    "SYMPTOM_SLOT",
    "SYMPTOMS_SLOT",
]
