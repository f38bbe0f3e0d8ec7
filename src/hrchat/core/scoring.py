"""Scoring request coordination."""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from ..errors import ScoreMismatchError
from ..schemas import CandidateScore, ParsedResume, WeightConfig
from .protocols import Scorer
from .transcript import ChatTranscript, format_number

CUTOFF_PROMPT = "Please enter a cutoff score to filter candidates."


class ScoringCoordinator:
    """Send candidates to the external scorer and name the results.

    The scorer answers with one score per input candidate, in input order. The
    i-th score is paired with the i-th candidate; a result of a different
    length is rejected with :class:`ScoreMismatchError` rather than guessed at.
    Weights are forwarded as-is; checking that they balance is the caller's job.
    """

    def __init__(self, scorer: Scorer, transcript: ChatTranscript) -> None:
        self._scorer = scorer
        self._transcript = transcript
        self._last_scores: list[CandidateScore] = []
        self._logger = structlog.get_logger(__name__)

    @property
    def last_scores(self) -> list[CandidateScore]:
        return list(self._last_scores)

    async def score(
        self,
        candidates: Sequence[ParsedResume],
        job_description: Any,
        weights: WeightConfig,
    ) -> list[CandidateScore]:
        payload = [candidate.model_dump(mode="json") for candidate in candidates]
        raw_scores = await self._scorer.score(
            payload,
            job_description,
            weights=weights.model_dump(),
        )
        raw_scores = list(raw_scores)
        if len(raw_scores) != len(candidates):
            self._logger.error(
                "scoring.length_mismatch",
                candidates=len(candidates),
                scores=len(raw_scores),
            )
            raise ScoreMismatchError(len(candidates), len(raw_scores))

        combined = [
            CandidateScore(
                name=candidate.display_name(position),
                email=candidate.contact_email(),
                score=float(value),
            )
            for position, (candidate, value) in enumerate(zip(candidates, raw_scores))
        ]
        self._last_scores = combined

        for item in combined:
            self._transcript.bot(f"{item.name}: {format_number(item.score)}")
        self._transcript.bot(CUTOFF_PROMPT)

        self._logger.info(
            "scoring.completed",
            candidate_count=len(combined),
            scores=[item.score for item in combined],
        )
        return list(combined)
