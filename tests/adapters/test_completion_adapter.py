"""Tests for the OpenAI completion adapter."""
# pylint: disable=missing-function-docstring,too-few-public-methods

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest

from health_companion.adapters import completion as completion_module
from health_companion.adapters.completion import (
    ADVICE_FALLBACK_MESSAGE,
    HEALTH_ADVICE_SYSTEM_PROMPT,
    OpenAICompletionAdapter,
)


class _FakeCompletions:
    def __init__(self, content: Any = "  Rest and hydrate.  ", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        usage = SimpleNamespace(prompt_tokens=40, completion_tokens=12, total_tokens=52)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


class _FakeOpenAI:
    def __init__(self, completions: _FakeCompletions) -> None:
        self.chat = SimpleNamespace(completions=completions)


def _adapter(completions: _FakeCompletions) -> OpenAICompletionAdapter:
    return OpenAICompletionAdapter(
        _FakeOpenAI(completions),  # type: ignore[arg-type]
        model="gpt-3.5-turbo",
        max_tokens=200,
        temperature=0.7,
    )


def test_get_advice_returns_stripped_first_choice() -> None:
    completions = _FakeCompletions()
    advice = asyncio.run(_adapter(completions).get_advice("headache"))
    assert advice == "Rest and hydrate."


def test_get_advice_sends_system_and_user_messages() -> None:
    completions = _FakeCompletions()
    asyncio.run(_adapter(completions).get_advice("sore throat"))

    assert len(completions.calls) == 1
    call = completions.calls[0]
    assert call["model"] == "gpt-3.5-turbo"
    assert call["max_tokens"] == 200
    assert call["temperature"] == pytest.approx(0.7)
    system, user = call["messages"]
    assert system == {"role": "system", "content": HEALTH_ADVICE_SYSTEM_PROMPT}
    assert user["role"] == "user"
    assert "sore throat" in user["content"]


@pytest.mark.parametrize(
    "error",
    [RuntimeError("network down"), TimeoutError("timed out"), ValueError("bad response")],
)
def test_get_advice_never_raises_on_api_failure(error: Exception) -> None:
    completions = _FakeCompletions(error=error)
    advice = asyncio.run(_adapter(completions).get_advice("fever"))
    assert advice == ADVICE_FALLBACK_MESSAGE


@pytest.mark.parametrize("content", [None, "", "   "])
def test_get_advice_treats_empty_content_as_failure(content: Any) -> None:
    completions = _FakeCompletions(content=content)
    advice = asyncio.run(_adapter(completions).get_advice("cough"))
    assert advice == ADVICE_FALLBACK_MESSAGE


def test_get_advice_handles_missing_choices() -> None:
    class _NoChoices(_FakeCompletions):
        def create(self, **kwargs: Any) -> Any:
            self.calls.append(kwargs)
            return SimpleNamespace(choices=[], usage=None)

    advice = asyncio.run(_adapter(_NoChoices()).get_advice("rash"))
    assert advice == ADVICE_FALLBACK_MESSAGE


def test_adapter_defaults_come_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(completion_module.config, "OPENAI_MODEL", "gpt-4o-mini", raising=True)
    monkeypatch.setattr(completion_module.config, "OPENAI_MAX_TOKENS", 120, raising=True)
    monkeypatch.setattr(completion_module.config, "OPENAI_TEMPERATURE", 0.2, raising=True)

    adapter = OpenAICompletionAdapter(_FakeOpenAI(_FakeCompletions()))  # type: ignore[arg-type]

    assert adapter.model == "gpt-4o-mini"
    assert adapter.max_tokens == 120
    assert adapter.temperature == pytest.approx(0.2)


def test_build_openai_client_passes_optional_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    def _fake_openai(**kwargs: Any) -> str:
        captured.update(kwargs)
        return "client"

    monkeypatch.setattr(completion_module, "OpenAI", _fake_openai, raising=True)
    monkeypatch.setattr(completion_module.config, "OPENAI_API_KEY", "sk-test", raising=True)
    monkeypatch.setattr(completion_module.config, "OPENAI_BASE_URL", None, raising=True)
    monkeypatch.setattr(completion_module.config, "OPENAI_TIMEOUT_SECONDS", None, raising=True)

    assert completion_module.build_openai_client() == "client"
    assert captured == {"api_key": "sk-test"}

    monkeypatch.setattr(
        completion_module.config, "OPENAI_BASE_URL", "http://localhost:8080/v1", raising=True
    )
    monkeypatch.setattr(completion_module.config, "OPENAI_TIMEOUT_SECONDS", 12.5, raising=True)
    captured.clear()
    completion_module.build_openai_client()
    assert captured == {
        "api_key": "sk-test",
        "base_url": "http://localhost:8080/v1",
        "timeout": 12.5,
    }
