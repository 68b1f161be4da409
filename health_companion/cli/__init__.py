"""CLI commands for health-companion."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from health_companion.core.config import config
from health_companion.core.intents import INTENT_REQUEST, LAUNCH_REQUEST, SESSION_ENDED_REQUEST
from health_companion.core.models import RequestEnvelope, ResponseEnvelope

main_app = typer.Typer(
    name="health-companion",
    help="Health Companion Alexa skill backend",
    no_args_is_help=True,
)
console = Console()


def _get_services():
    # Deferred so --help works without constructing an OpenAI client.
    from health_companion.bootstrap import (  # pylint: disable=import-outside-toplevel
        build_default_service_container,
    )

    return build_default_service_container()


def _parse_slots(pairs: list[str]) -> dict[str, dict[str, str]]:
    slots: dict[str, dict[str, str]] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"expected name=value, got {pair!r}", param_hint="--slot")
        slots[name.strip()] = {"name": name.strip(), "value": value}
    return slots


def build_envelope(request_type: str, intent: Optional[str], slots: dict) -> RequestEnvelope:
    """Build a locally simulated Alexa envelope."""
    request: dict = {
        "type": request_type,
        "requestId": "cli-request",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "locale": "en-US",
    }
    if intent is not None:
        request["intent"] = {"name": intent, "slots": slots}
    return RequestEnvelope.model_validate(
        {"version": "1.0", "session": {"sessionId": "cli-session", "new": True}, "request": request}
    )


@main_app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (defaults to HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port (defaults to PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP server."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    uvicorn.run(
        "health_companion.api_factory:create_app",
        factory=True,
        host=host or config.HOST,
        port=port or config.PORT,
        reload=reload,
    )


@main_app.command("ask")
def ask(symptoms: str = typer.Argument(..., help="Free-text symptom description")) -> None:
    """Request advice for SYMPTOMS directly from the completion API."""
    services = _get_services()
    if services.completion is None:
        console.print("[red]Error:[/red] completion client is not configured")
        raise typer.Exit(1)
    advice = asyncio.run(services.completion.get_advice(symptoms))
    console.print(advice, markup=False)


@main_app.command("simulate")
def simulate(
    intent: str = typer.Argument(
        ..., help="Intent name, or 'launch' / 'session-ended' for those request types"
    ),
    slot: list[str] = typer.Option([], "--slot", "-s", help="Slot as name=value; repeatable"),
) -> None:
    """Run a simulated Alexa request through the router and print the spoken response."""
    if intent == "launch":
        envelope = build_envelope(LAUNCH_REQUEST, None, {})
    elif intent == "session-ended":
        envelope = build_envelope(SESSION_ENDED_REQUEST, None, {})
    else:
        envelope = build_envelope(INTENT_REQUEST, intent, _parse_slots(slot))

    services = _get_services()
    if services.intent_router is None:
        console.print("[red]Error:[/red] intent router is not configured")
        raise typer.Exit(1)
    speech = asyncio.run(services.intent_router.dispatch(envelope, services))
    body = ResponseEnvelope.from_speech(speech).response

    spoken = escape(speech.speech) if speech.speech else "[dim](none)[/dim]"
    console.print(f"[bold]Speech:[/bold] {spoken}")
    if speech.reprompt is not None:
        console.print(f"[bold]Reprompt:[/bold] {escape(speech.reprompt)}")
    console.print(f"[bold]End session:[/bold] {body.shouldEndSession}")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["build_envelope", "main", "main_app"]
