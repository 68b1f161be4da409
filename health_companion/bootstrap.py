"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from health_companion.adapters.completion import OpenAICompletionAdapter
from health_companion.services import ServiceContainer, build_default_services


def build_default_service_container() -> ServiceContainer:
    """Return the default service container wired to the OpenAI completion adapter."""

    return build_default_services(completion_port=OpenAICompletionAdapter())


__all__ = ["build_default_service_container"]
