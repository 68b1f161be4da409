"""Tests for the health-companion CLI."""
# pylint: disable=missing-function-docstring

from typer.testing import CliRunner

from health_companion import cli
from health_companion.services import build_default_services
from health_companion.services.intents.session_intents import WELCOME_MESSAGE
from health_companion.services.intents.simple_intents import GOODBYE_MESSAGE

runner = CliRunner()


def _patch_services(monkeypatch, stub_completion):
    services = build_default_services(completion_port=stub_completion)
    monkeypatch.setattr(cli, "_get_services", lambda: services)
    return services


def test_ask_prints_advice(monkeypatch, stub_completion):
    _patch_services(monkeypatch, stub_completion)

    result = runner.invoke(cli.main_app, ["ask", "sore throat"])

    assert result.exit_code == 0
    assert stub_completion.advice in result.output
    assert stub_completion.calls == ["sore throat"]


def test_simulate_symptom_intent(monkeypatch, stub_completion):
    _patch_services(monkeypatch, stub_completion)

    result = runner.invoke(
        cli.main_app, ["simulate", "SymptomIntent", "--slot", "symptom=headache"]
    )

    assert result.exit_code == 0
    assert "For your symptom of headache" in result.output
    assert stub_completion.calls == ["headache"]


def test_simulate_launch(monkeypatch, stub_completion):
    _patch_services(monkeypatch, stub_completion)

    result = runner.invoke(cli.main_app, ["simulate", "launch"])

    assert result.exit_code == 0
    assert "Welcome to Health Companion" in result.output
    assert WELCOME_MESSAGE.startswith("Welcome to Health Companion")


def test_simulate_stop_reports_session_end(monkeypatch, stub_completion):
    _patch_services(monkeypatch, stub_completion)

    result = runner.invoke(cli.main_app, ["simulate", "AMAZON.StopIntent"])

    assert result.exit_code == 0
    assert "Goodbye!" in result.output
    assert "End session: True" in result.output
    assert GOODBYE_MESSAGE.endswith("Goodbye!")


def test_simulate_rejects_malformed_slot(monkeypatch, stub_completion):
    _patch_services(monkeypatch, stub_completion)

    result = runner.invoke(cli.main_app, ["simulate", "SymptomIntent", "--slot", "headache"])

    assert result.exit_code != 0
    assert stub_completion.calls == []


def test_build_envelope_sets_intent_and_slots():
    envelope = cli.build_envelope(
        "IntentRequest", "SymptomIntent", {"symptom": {"name": "symptom", "value": "cough"}}
    )

    assert envelope.intent_name == "SymptomIntent"
    assert envelope.slot_value("symptom") == "cough"
    assert envelope.age() is not None
