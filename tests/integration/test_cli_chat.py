from __future__ import annotations

import json
from pathlib import Path

import pytest
from dependency_injector import providers
from typer.testing import CliRunner

from hrchat import cli
from hrchat.cli import app
from hrchat.container import create_container


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def resumes_path(tmp_path: Path) -> Path:
    path = tmp_path / "resumes.json"
    path.write_text(
        json.dumps(
            [
                {"parsed_data": {"name": "Alice Smith", "email": "alice@example.com"}},
                {"parsed_data": {"name": "Bob Jones", "email": "bob@example.com"}},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def stubbed_container(monkeypatch, backend, transport):
    def factory(*, settings=None):
        container = create_container(settings=settings)
        container.backend_client.override(providers.Object(backend))
        container.transport.override(providers.Object(transport))
        return container

    monkeypatch.setattr(cli, "create_container", factory)


def test_cli_runs_full_screening_round(
    tmp_path: Path, runner: CliRunner, resumes_path: Path, stubbed_container, backend, transport
) -> None:
    audit_path = tmp_path / "audit.jsonl"
    turns = [
        "/weights skills=60",
        "score",
        "/weights skills=50",
        "/jd Backend engineer",
        "score",
        "70",
        "/toggle 1",
        "/send Please join us on Monday.",
        "/quit",
    ]

    result = runner.invoke(
        app,
        ["--resumes", str(resumes_path), "--audit-log", str(audit_path)],
        input="\n".join(turns) + "\n",
    )

    assert result.exit_code == 0, result.output
    output = result.output
    assert "Loaded 2 resumes." in output
    assert "Weights: skills=60, education=20, experience=20, certifications=10 (total 110)" in output
    assert "Bot: ⚠️ Please ensure the weights sum to 100 before scoring." in output
    assert "Bot: Alice Smith: 80" in output
    assert "Bot: ✓ Passed: Alice Smith (alice@example.com)" in output
    assert "[x] 1. Alice Smith (alice@example.com) - Score: 80" in output
    assert "Bot: ✅ Invitations sent to: alice@example.com" in output

    assert len(backend.score_calls) == 1
    assert backend.score_calls[0][1] == {"title": "Backend engineer"}
    assert transport.calls == [("Alice Smith", "alice@example.com", "Please join us on Monday.")]

    audit_lines = [json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines()]
    assert audit_lines[0] == {**audit_lines[0], "sender": "user", "text": "score"}
    assert audit_lines[-1]["text"] == "✅ Invitations sent to: alice@example.com"


def test_cli_reports_collaborator_errors_and_continues(
    runner: CliRunner, resumes_path: Path, stubbed_container, backend
) -> None:
    backend.scores = [1]

    result = runner.invoke(
        app,
        ["--resumes", str(resumes_path)],
        input="score\nWhat does Alice know?\n",
    )

    assert result.exit_code == 0, result.output
    assert "Error: Scorer returned 1 scores for 2 candidates" in result.output
    assert "Bot: stub answer" in result.output


def test_cli_rejects_non_mapping_config(tmp_path: Path, runner: CliRunner, resumes_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    result = runner.invoke(app, ["--resumes", str(resumes_path), "--config", str(config_path)])

    assert result.exit_code != 0


@pytest.fixture
def stubbed_backend_only(monkeypatch, backend):
    def factory(*, settings=None):
        container = create_container(settings=settings)
        container.backend_client.override(providers.Object(backend))
        return container

    monkeypatch.setattr(cli, "create_container", factory)


def test_cli_starts_with_default_container(runner: CliRunner, resumes_path: Path) -> None:
    result = runner.invoke(app, ["--resumes", str(resumes_path)], input="/weights\n/quit\n")

    assert result.exit_code == 0, result.output
    assert "Weights: skills=50, education=20, experience=20, certifications=10 (total 100)" in result.output


def test_cli_sends_through_configured_console_transport(
    runner: CliRunner, resumes_path: Path, stubbed_backend_only
) -> None:
    turns = ["score", "50", "/toggle 2", "/send See you Tuesday.", "/quit"]

    result = runner.invoke(app, ["--resumes", str(resumes_path)], input="\n".join(turns) + "\n")

    assert result.exit_code == 0, result.output
    assert "Bot: ✅ Invitations sent to: bob@example.com" in result.output


def test_cli_rejects_emailjs_without_credentials(tmp_path: Path, runner: CliRunner, resumes_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("messaging:\n  transport: emailjs\n  service_id: svc\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["--resumes", str(resumes_path), "--config", str(config_path)],
        input="/quit\n",
    )

    assert result.exit_code == 2
    assert "EmailJS transport requires" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
