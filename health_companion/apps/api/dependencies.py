"""Shared FastAPI dependencies for service access."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from health_companion.services import ServiceContainer, runtime
from health_companion.services.intent_router import IntentRouter


def get_service_container(request: Request) -> ServiceContainer:
    """Resolve the container attached to the app, falling back to the runtime registry."""
    services = getattr(request.app.state, "services", None)
    if isinstance(services, ServiceContainer):
        return services
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_intent_router(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> IntentRouter:
    """Return the intent router bound to the active container."""
    if container.intent_router is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Intent router is unavailable",
        )
    return container.intent_router


__all__ = ["get_intent_router", "get_service_container"]
