from __future__ import annotations

from typing import Any, Sequence

import pytest

from hrchat.core import ConversationController
from hrchat.schemas import ParsedResume


class StubBackend:
    def __init__(self, scores: Sequence[float] = (), answer: str = "stub answer") -> None:
        self.scores = list(scores)
        self.answer_text = answer
        self.parse_calls: list[str] = []
        self.score_calls: list[tuple[list[dict[str, Any]], Any, dict[str, float]]] = []
        self.answer_calls: list[tuple[str, dict[str, Any]]] = []

    async def parse_job_description(self, text: str) -> dict[str, Any]:
        self.parse_calls.append(text)
        return {"title": text.splitlines()[0]}

    async def score(
        self,
        candidates: list[dict[str, Any]],
        job_description: Any,
        *,
        weights: dict[str, float],
    ) -> list[float]:
        self.score_calls.append((candidates, job_description, weights))
        return list(self.scores)

    async def answer(self, question: str, resume: dict[str, Any]) -> str:
        self.answer_calls.append((question, resume))
        return self.answer_text


class StubTransport:
    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[tuple[str, str, str]] = []

    async def send(self, name: str, email: str, body: str) -> None:
        self.calls.append((name, email, body))
        if email in self.failing:
            raise RuntimeError(f"delivery to {email} failed")


def build_resume(name: str | None = None, email: str | None = None, **extra: Any) -> ParsedResume:
    return ParsedResume(parsed_data={"name": name, "email": email, **extra})


@pytest.fixture
def resumes() -> list[ParsedResume]:
    return [
        build_resume("Alice Smith", "alice@example.com", skills=["Python", "SQL"]),
        build_resume("Bob Jones", "bob@example.com", skills=["Java"]),
    ]


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend(scores=[80, 60])


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def controller(
    resumes: list[ParsedResume],
    backend: StubBackend,
    transport: StubTransport,
) -> ConversationController:
    return ConversationController(
        resumes=resumes,
        jd_parser=backend,
        scorer=backend,
        answerer=backend,
        transport=transport,
    )
