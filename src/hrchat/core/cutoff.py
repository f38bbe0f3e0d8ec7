"""Cutoff filtering of the last scored candidate list."""

from __future__ import annotations

from typing import Sequence

import structlog

from ..schemas import CandidateScore
from .transcript import ChatTranscript, format_number

INVITE_PROMPT = "Please select whom you want to invite and type your message below."


class CutoffFilter:
    """Keep candidates whose score reaches the cutoff (inclusive)."""

    def __init__(self, transcript: ChatTranscript) -> None:
        self._transcript = transcript
        self._logger = structlog.get_logger(__name__)

    def apply(self, last_scores: Sequence[CandidateScore], cutoff: float) -> list[CandidateScore]:
        passed = [item for item in last_scores if item.score >= cutoff]

        self._logger.info(
            "cutoff.applied",
            cutoff=cutoff,
            scored=len(last_scores),
            passed=len(passed),
        )

        if not passed:
            self._transcript.bot(f"No candidate has a score ≥ {format_number(cutoff)}.")
            return passed

        for item in passed:
            self._transcript.bot(f"✓ Passed: {item.name} ({item.email})")
        self._transcript.bot(INVITE_PROMPT)
        return passed
