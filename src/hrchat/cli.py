"""Typer CLI entrypoint for the screening chat."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import structlog
import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .core import ConversationController
from .errors import HRChatError, ResumeLoadError
from .loaders import ResumeLoader, TranscriptAuditLogger
from .logging import configure_logging
from .schemas import Message, Sender

app = typer.Typer(help="Conversational resume screening.")

HELP_TEXT = """Commands:
  /jd TEXT | /jd @FILE     parse a job description
  /weights [key=value ...] show or edit priority weights
  /candidates              list candidates open for invitation
  /toggle N                select or unselect candidate N
  /draft TEXT              set the invitation message
  /send [TEXT]             send invitations to the selection
  /quit                    leave the chat
Anything else is sent to the chat ("score", a cutoff, or a question)."""


@app.command()
def chat(
    resumes: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Parsed resumes JSON/JSONL path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Transcript audit log output (JSONL)."),
    backend_url: Optional[str] = typer.Option(None, help="Screening backend base URL."),
) -> None:
    """Start an interactive screening chat."""
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
            if not isinstance(loaded, dict):
                raise typer.BadParameter("Config file must be a YAML object", param_hint="config")
            settings = loaded
    if backend_url:
        settings.setdefault("backend", {})["base_url"] = backend_url

    configure_logging(log_level)
    logger = structlog.get_logger(__name__)

    try:
        container = create_container(settings=settings)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc

    try:
        loaded_resumes = ResumeLoader().load(resumes)
    except ResumeLoadError as exc:
        loaded_resumes = exc.partial
        logger.warning("resumes.partial_load", errors=exc.errors)
        for error in exc.errors:
            typer.echo(f"Skipped resume ({error})", err=True)

    try:
        controller: ConversationController = container.controller(resumes=loaded_resumes)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc
    controller.transcript.subscribe(_echo_bot_message)
    if audit_log:
        controller.transcript.subscribe(TranscriptAuditLogger(audit_log))

    typer.echo(f"Loaded {len(loaded_resumes)} resumes. Type /help for commands.")
    while True:
        try:
            line = typer.prompt("You", default="", show_default=False, prompt_suffix="> ")
        except typer.Abort:
            break
        if line.strip() == "/quit":
            break
        try:
            asyncio.run(_dispatch(controller, line))
        except (HRChatError, OSError) as exc:
            logger.warning("chat.turn_failed", error=str(exc))
            typer.echo(f"Error: {exc}", err=True)


async def _dispatch(controller: ConversationController, line: str) -> None:
    command, _, argument = line.strip().partition(" ")
    argument = argument.strip()

    if command == "/help":
        typer.echo(HELP_TEXT)
    elif command == "/jd":
        await controller.submit_job_description(_read_argument(argument))
    elif command == "/weights":
        _update_weights(controller, argument)
    elif command == "/candidates":
        _show_candidates(controller)
    elif command == "/toggle":
        _toggle(controller, argument)
    elif command == "/draft":
        controller.set_invitation_draft(argument)
    elif command == "/send":
        await controller.send_invitations(argument or None)
    else:
        await controller.submit_input(line)


def _echo_bot_message(message: Message) -> None:
    if message.sender is Sender.BOT:
        typer.echo(f"Bot: {message.text}")


def _read_argument(argument: str) -> str:
    if argument.startswith("@"):
        return Path(argument[1:]).read_text(encoding="utf-8")
    return argument


def _update_weights(controller: ConversationController, argument: str) -> None:
    weights = controller.weights
    for pair in argument.split():
        key, sep, value = pair.partition("=")
        if not sep or key not in type(weights).model_fields:
            typer.echo(f"Unknown weight setting: {pair}", err=True)
            continue
        try:
            setattr(weights, key, float(value))
        except (ValueError, ValidationError):
            typer.echo(f"Weight {key} must be a number between 0 and 100.", err=True)
    summary = ", ".join(f"{key}={value:g}" for key, value in weights.model_dump().items())
    typer.echo(f"Weights: {summary} (total {weights.total():g})")


def _show_candidates(controller: ConversationController) -> None:
    if not controller.show_invitation_step:
        typer.echo("No invitation step is open.")
        return
    selected = set(controller.selected_recipients)
    for idx, item in enumerate(controller.passed_candidates):
        mark = "x" if idx in selected else " "
        typer.echo(f"[{mark}] {idx + 1}. {item.name} ({item.email}) - Score: {item.score:g}")


def _toggle(controller: ConversationController, argument: str) -> None:
    if not controller.show_invitation_step:
        typer.echo("No invitation step is open.")
        return
    try:
        controller.toggle_recipient(int(argument) - 1)
    except (ValueError, IndexError):
        typer.echo(f"Pick a candidate number between 1 and {len(controller.passed_candidates)}.", err=True)
        return
    _show_candidates(controller)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
