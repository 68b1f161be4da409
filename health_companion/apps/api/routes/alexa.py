"""Alexa skill endpoint: parse the envelope, verify it, dispatch, and render speech."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from health_companion.apps.api.dependencies import get_intent_router, get_service_container
from health_companion.apps.api.verification import verify_envelope
from health_companion.core.exceptions import EnvelopeVerificationError
from health_companion.core.logging import bind_session_id, get_logger, reset_session_id
from health_companion.core.models import RequestEnvelope, ResponseEnvelope
from health_companion.services import ServiceContainer
from health_companion.services.intent_router import IntentRouter

router = APIRouter()
logger = get_logger(__name__)


@router.post("/alexa")
async def handle_alexa_request(
    request: Request,
    services: Annotated[ServiceContainer, Depends(get_service_container)],
    intent_router: Annotated[IntentRouter, Depends(get_intent_router)],
):
    """Turn one Alexa request envelope into one Alexa response envelope."""
    try:
        envelope = RequestEnvelope.model_validate(await request.json())
    except ValidationError as exc:
        logger.warning("Malformed Alexa envelope: %s", exc.errors(include_url=False))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Malformed Alexa request envelope"},
        )
    except ValueError:
        logger.error("Invalid JSON received", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid JSON"},
        )

    try:
        verify_envelope(envelope)
    except EnvelopeVerificationError as exc:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    token = bind_session_id(envelope.session_id)
    try:
        speech = await intent_router.dispatch(envelope, services)
    finally:
        reset_session_id(token)
    return JSONResponse(ResponseEnvelope.from_speech(speech).to_payload())


__all__ = ["router"]
