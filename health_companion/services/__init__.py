"""Application service layer scaffolding for intent handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from health_companion.core.ports import CompletionPort

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .intent_router import IntentRouter


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    completion: Optional[CompletionPort] = None
    intent_router: Optional["IntentRouter"] = None


def build_default_services(
    *,
    completion_port: Optional[CompletionPort] = None,
) -> ServiceContainer:
    """Return a service container with every request kind wired to its handler."""

    from .intent_router import (  # pylint: disable=import-outside-toplevel
        IntentRouter,
        register_default_handlers,
    )

    intent_router = IntentRouter()
    register_default_handlers(intent_router)
    return ServiceContainer(
        completion=completion_port,
        intent_router=intent_router,
    )


__all__ = ["ServiceContainer", "build_default_services"]
