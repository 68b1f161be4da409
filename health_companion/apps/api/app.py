"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from health_companion import HEALTH_COMPANION_VERSION
from health_companion.apps.api.middleware import CorrelationIdMiddleware
from health_companion.core.logging import get_logger
from health_companion.services import ServiceContainer, runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup state and re-register the app's services for non-HTTP callers."""
    logger.info("Starting Health Companion %s...", HEALTH_COMPANION_VERSION)
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
        if services.intent_router is not None:
            missing = services.intent_router.missing_kinds()
            if missing:
                logger.warning(
                    "No handlers registered for request kinds: %s",
                    ", ".join(kind.value for kind in missing),
                )
    logger.info("Health Companion ready.")
    yield
    logger.info("Health Companion shutting down.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(title="Health Companion", version=HEALTH_COMPANION_VERSION, lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import alexa, health  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(alexa.router)
    return app


__all__ = ["create_app", "lifespan"]
