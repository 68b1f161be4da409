"""Utilities for working with OpenAI SDK objects."""

from dataclasses import dataclass
from typing import Any, Optional

from health_companion.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class TokenUsage:
    """Token counts reported by a single completion."""

    model: str
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cached_input_tokens: Optional[int] = None


def extract_cached_input_tokens(usage: Any) -> int | None:
    """Best-effort extraction of cached input token counts from SDK usage objects.

    Reads ``usage.prompt_tokens_details.cached_tokens`` from Chat Completions usage.

    Returns:
        Cached input token count if available, None otherwise.
    """
    try:
        ptd = getattr(usage, "prompt_tokens_details", None)
        if ptd is not None:
            val = getattr(ptd, "cached_tokens", None)
            if val is None and isinstance(ptd, dict):
                val = ptd.get("cached_tokens")
            if isinstance(val, int) and val > 0:
                return val
    except Exception:  # pylint: disable=broad-except
        return None
    return None


def extract_token_usage(usage: Any, model: str) -> TokenUsage | None:
    """Normalize a Chat Completions usage object into :class:`TokenUsage`."""
    if usage is None:
        return None

    it = getattr(usage, "prompt_tokens", None)
    ot = getattr(usage, "completion_tokens", None)
    tt = getattr(usage, "total_tokens", None)
    if tt is None and (it is not None or ot is not None):
        tt = (it or 0) + (ot or 0)

    return TokenUsage(
        model=model,
        prompt_tokens=it,
        completion_tokens=ot,
        total_tokens=tt,
        cached_input_tokens=extract_cached_input_tokens(usage),
    )


def log_openai_usage(usage: Any, model: str) -> TokenUsage | None:
    """Log token usage for a completion and return the normalized counts."""
    counts = extract_token_usage(usage, model)
    if counts is None:
        return None
    logger.info(
        "openai usage",
        extra={
            "event": "openai_usage",
            "model": counts.model,
            "prompt_tokens": counts.prompt_tokens,
            "completion_tokens": counts.completion_tokens,
            "total_tokens": counts.total_tokens,
            "cached_input_tokens": counts.cached_input_tokens,
        },
    )
    return counts


def extract_message_text(content: Any) -> str:
    """Flatten chat message content (plain string or list of parts) to text."""
    if content is None:
        return ""
    if isinstance(content, list):
        return "".join(part.get("text", "") if isinstance(part, dict) else "" for part in content)
    return str(content)


__all__ = [
    "TokenUsage",
    "extract_cached_input_tokens",
    "extract_token_usage",
    "log_openai_usage",
    "extract_message_text",
]
