"""Core exception types shared across layers."""


class EnvelopeVerificationError(Exception):
    """Raised when an inbound Alexa envelope fails request verification."""

    status_code = 400


class ApplicationIdMismatchError(EnvelopeVerificationError):
    """Raised when the envelope targets a different skill than the one configured."""

    status_code = 403


class StaleRequestError(EnvelopeVerificationError):
    """Raised when the envelope timestamp falls outside the accepted tolerance."""


__all__ = [
    "EnvelopeVerificationError",
    "ApplicationIdMismatchError",
    "StaleRequestError",
]
