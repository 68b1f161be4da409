"""Infrastructure adapter exports."""

from .completion import ADVICE_FALLBACK_MESSAGE, OpenAICompletionAdapter

__all__ = ["ADVICE_FALLBACK_MESSAGE", "OpenAICompletionAdapter"]
