"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Protocol


class CompletionPort(Protocol):
    """Port exposing the health-advice completion call."""

    async def get_advice(self, symptom_text: str) -> str:
        """Return advice text for ``symptom_text``; never raises."""
        ...


__all__ = ["CompletionPort"]
