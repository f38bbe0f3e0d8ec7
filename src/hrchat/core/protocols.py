"""Collaborator contracts consumed by the chat workflow."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class JobDescriptionParser(Protocol):
    """Turns raw job-description text into a structured, opaque object."""

    async def parse_job_description(self, text: str) -> Any:
        """Return the structured job description for ``text``."""


@runtime_checkable
class Scorer(Protocol):
    """Scores parsed candidates against a structured job description."""

    async def score(
        self,
        candidates: list[dict[str, Any]],
        job_description: Any,
        *,
        weights: dict[str, float],
    ) -> Sequence[float]:
        """Return one score per candidate, in the order the candidates were given."""


@runtime_checkable
class QuestionAnswerer(Protocol):
    """Answers a free-text question about a single parsed resume."""

    async def answer(self, question: str, resume: dict[str, Any]) -> str:
        """Return the answer text."""


@runtime_checkable
class MessagingTransport(Protocol):
    """Delivers one invitation message to one recipient.

    Implementations signal failure by raising; the reason is not inspected.
    """

    async def send(self, name: str, email: str, body: str) -> None:
        """Deliver ``body`` to ``name`` at ``email``."""
