"""OpenAI-backed completion adapter producing health advice for symptoms."""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional, cast

from openai import OpenAI
from openai.types.chat import ChatCompletionMessageParam

from health_companion.core.config import config
from health_companion.core.logging import get_logger
from health_companion.services.openai_utils import extract_message_text, log_openai_usage

logger = get_logger(__name__)

HEALTH_ADVICE_SYSTEM_PROMPT = (
    "You are a helpful health assistant. Provide basic health advice and recommendations for "
    "common symptoms. Always include disclaimer that this is not medical advice and serious "
    "symptoms should be evaluated by a doctor."
)

ADVICE_FALLBACK_MESSAGE = (
    "I'm sorry, I'm having trouble processing your symptoms right now. Please try again later "
    "or consult with a healthcare professional."
)


class EmptyCompletionError(RuntimeError):
    """Raised when the completion API answers without any message content."""


def build_user_prompt(symptom_text: str) -> str:
    return (
        f"I have the following symptoms: {symptom_text}. "
        "What could this be and what should I do?"
    )


def build_openai_client() -> OpenAI:
    """Construct the process-wide OpenAI client from configuration."""
    kwargs: dict[str, Any] = {"api_key": config.OPENAI_API_KEY}
    if config.OPENAI_BASE_URL:
        kwargs["base_url"] = config.OPENAI_BASE_URL
    if config.OPENAI_TIMEOUT_SECONDS is not None:
        kwargs["timeout"] = config.OPENAI_TIMEOUT_SECONDS
    return OpenAI(**kwargs)


class OpenAICompletionAdapter:
    """Completion port implementation backed by the OpenAI chat-completions API.

    The client is built once and reused for every request; it carries only the
    credential and connection settings. ``get_advice`` always resolves to a
    non-empty string: any failure of the outbound call is logged and replaced by
    :data:`ADVICE_FALLBACK_MESSAGE`.
    """

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> None:
        self._client = client if client is not None else build_openai_client()
        self.model = model or config.OPENAI_MODEL
        self.max_tokens = max_tokens if max_tokens is not None else config.OPENAI_MAX_TOKENS
        self.temperature = temperature if temperature is not None else config.OPENAI_TEMPERATURE

    async def get_advice(self, symptom_text: str) -> str:
        """Return generated advice for ``symptom_text`` or the fallback apology."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._request_advice, symptom_text)
        except Exception:  # pylint: disable=broad-except
            logger.error(
                "OpenAI completion failed; returning fallback advice.",
                exc_info=True,
                extra={"event": "openai_error", "model": self.model},
            )
            return ADVICE_FALLBACK_MESSAGE

    def _request_advice(self, symptom_text: str) -> str:
        chat_messages = cast(
            List[ChatCompletionMessageParam],
            [
                {"role": "system", "content": HEALTH_ADVICE_SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(symptom_text)},
            ],
        )
        completion = self._client.chat.completions.create(
            model=self.model,
            messages=chat_messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        log_openai_usage(getattr(completion, "usage", None), self.model)
        if not completion.choices:
            raise EmptyCompletionError("completion returned no choices")
        text = extract_message_text(completion.choices[0].message.content).strip()
        if not text:
            raise EmptyCompletionError("completion returned empty content")
        return text


__all__ = [
    "ADVICE_FALLBACK_MESSAGE",
    "HEALTH_ADVICE_SYSTEM_PROMPT",
    "EmptyCompletionError",
    "OpenAICompletionAdapter",
    "build_openai_client",
    "build_user_prompt",
]
