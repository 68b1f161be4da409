"""Alexa request verification applied before an envelope reaches the router."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from health_companion.core.config import config
from health_companion.core.exceptions import ApplicationIdMismatchError, StaleRequestError
from health_companion.core.logging import get_logger
from health_companion.core.models import RequestEnvelope

logger = get_logger(__name__)


def verify_application_id(envelope: RequestEnvelope) -> None:
    """Reject envelopes addressed to another skill when ``ALEXA_SKILL_ID`` is set."""
    expected = config.ALEXA_SKILL_ID
    if not expected:
        return
    received = envelope.application_id()
    if received != expected:
        logger.warning("Rejected request for application id %s.", received)
        raise ApplicationIdMismatchError("Application id does not match this skill")


def verify_timestamp(envelope: RequestEnvelope, now: Optional[datetime] = None) -> None:
    """Reject envelopes whose timestamp is missing or outside the tolerance window."""
    if not config.ALEXA_VERIFY_TIMESTAMP:
        return
    age = envelope.age(now)
    if age is None:
        logger.warning("Rejected request without a timestamp.")
        raise StaleRequestError("Request timestamp missing")
    if abs(age) > config.ALEXA_TIMESTAMP_TOLERANCE_SECONDS:
        logger.warning("Rejected request with timestamp %.1fs outside tolerance.", age)
        raise StaleRequestError("Request timestamp outside tolerance")


def verify_envelope(envelope: RequestEnvelope, now: Optional[datetime] = None) -> None:
    """Run every configured verification step, raising on the first failure."""
    verify_application_id(envelope)
    verify_timestamp(envelope, now)


__all__ = ["verify_application_id", "verify_envelope", "verify_timestamp"]
