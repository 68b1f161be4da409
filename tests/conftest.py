"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so real keys are used when present.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Ensure required env vars exist for config import in app (fallbacks only)
os.environ.setdefault("OPENAI_API_KEY", "test")

# pylint: disable=wrong-import-position,redefined-outer-name
from fastapi.testclient import TestClient  # noqa: E402

from health_companion.apps.api.app import create_app  # noqa: E402
from health_companion.core.config import config  # noqa: E402
from health_companion.core.models import RequestEnvelope  # noqa: E402
from health_companion.services import (  # noqa: E402
    ServiceContainer,
    build_default_services,
    runtime,
)

STUB_ADVICE = "Drink water and rest."


class StubCompletion:
    """Completion port double that records every symptom it is asked about."""

    def __init__(self, advice: str = STUB_ADVICE) -> None:
        self.advice = advice
        self.calls: list[str] = []

    async def get_advice(self, symptom_text: str) -> str:
        self.calls.append(symptom_text)
        return self.advice


def build_payload(
    request_type: str = "IntentRequest",
    intent: Optional[str] = None,
    slots: Optional[dict[str, Any]] = None,
    *,
    timestamp: Optional[str] = None,
    application_id: str = "amzn1.ask.skill.test",
) -> dict[str, Any]:
    """Return a raw Alexa request envelope as posted by the platform."""
    request: dict[str, Any] = {
        "type": request_type,
        "requestId": "amzn1.echo-api.request.test",
        "timestamp": timestamp or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "locale": "en-US",
    }
    if intent is not None:
        request["intent"] = {"name": intent, "confirmationStatus": "NONE", "slots": slots or {}}
    return {
        "version": "1.0",
        "session": {
            "new": True,
            "sessionId": "amzn1.echo-api.session.test",
            "application": {"applicationId": application_id},
            "user": {"userId": "amzn1.ask.account.test"},
        },
        "context": {"System": {"application": {"applicationId": application_id}}},
        "request": request,
    }


@pytest.fixture(autouse=True)
def default_verification(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin request verification settings regardless of any local .env."""
    monkeypatch.setattr(config, "ALEXA_SKILL_ID", None, raising=True)
    monkeypatch.setattr(config, "ALEXA_VERIFY_TIMESTAMP", False, raising=True)
    monkeypatch.setattr(config, "ALEXA_TIMESTAMP_TOLERANCE_SECONDS", 150, raising=True)
    yield
    runtime.clear_services()


@pytest.fixture
def payload_factory() -> Callable[..., dict[str, Any]]:
    return build_payload


@pytest.fixture
def envelope_factory() -> Callable[..., RequestEnvelope]:
    def _make(*args: Any, **kwargs: Any) -> RequestEnvelope:
        return RequestEnvelope.model_validate(build_payload(*args, **kwargs))

    return _make


@pytest.fixture
def stub_completion() -> StubCompletion:
    return StubCompletion()


@pytest.fixture
def services(stub_completion: StubCompletion) -> ServiceContainer:
    return build_default_services(completion_port=stub_completion)


@pytest.fixture
def client(services: ServiceContainer) -> Iterator[TestClient]:
    with TestClient(create_app(services)) as test_client:
        yield test_client
