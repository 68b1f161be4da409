"""Symptom handlers: read a slot, ask the completion port for advice, speak it back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from health_companion.core.intents import SYMPTOM_SLOT, SYMPTOMS_SLOT
from health_companion.core.logging import get_logger
from health_companion.core.models import SpeechResponse
from health_companion.core.ports import CompletionPort
from health_companion.services.intent_router import IntentRequest

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from health_companion.services import ServiceContainer

logger = get_logger(__name__)

CLARIFY_MESSAGE = "I didn't catch that. What symptoms are you experiencing?"
CLARIFY_REPROMPT = "Please tell me what symptoms you're having."


@dataclass(frozen=True, slots=True)
class SymptomPrompt:
    """Slot to read and the phrasing used around the returned advice."""

    slot: str
    template: str
    reprompt: str

    def render(self, symptoms: str, advice: str) -> str:
        return self.template.format(symptoms=symptoms, advice=advice)


SINGLE_SYMPTOM = SymptomPrompt(
    slot=SYMPTOM_SLOT,
    template="For your symptom of {symptoms}, here's what I found: {advice}",
    reprompt="Do you have any other symptoms you'd like me to check?",
)

MULTIPLE_SYMPTOMS = SymptomPrompt(
    slot=SYMPTOMS_SLOT,
    template="Based on your symptoms: {symptoms}, here's what I found: {advice}",
    reprompt="Is there anything else you'd like to know?",
)


def _require_completion(services: "ServiceContainer") -> CompletionPort:
    completion = services.completion
    if completion is None:
        raise RuntimeError("CompletionPort has not been configured.")
    return completion


async def _respond_with_advice(
    request: IntentRequest, services: "ServiceContainer", prompt: SymptomPrompt
) -> SpeechResponse:
    symptoms = request.envelope.slot_value(prompt.slot)
    if symptoms is None:
        logger.info("Slot %s empty; asking the user to repeat their symptoms.", prompt.slot)
        return SpeechResponse.ask(CLARIFY_MESSAGE, CLARIFY_REPROMPT)

    advice = await _require_completion(services).get_advice(symptoms)
    return SpeechResponse.ask(prompt.render(symptoms, advice), prompt.reprompt)


async def handle_symptom(request: IntentRequest, services: "ServiceContainer") -> SpeechResponse:
    """Handle ``SymptomIntent`` using the singular ``symptom`` slot."""
    return await _respond_with_advice(request, services, SINGLE_SYMPTOM)


async def handle_multiple_symptoms(
    request: IntentRequest, services: "ServiceContainer"
) -> SpeechResponse:
    """Handle ``MultipleSymptomIntent`` using the plural ``symptoms`` slot."""
    return await _respond_with_advice(request, services, MULTIPLE_SYMPTOMS)


__all__ = [
    "CLARIFY_MESSAGE",
    "CLARIFY_REPROMPT",
    "MULTIPLE_SYMPTOMS",
    "SINGLE_SYMPTOM",
    "SymptomPrompt",
    "handle_multiple_symptoms",
    "handle_symptom",
]
