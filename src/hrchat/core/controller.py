"""Conversation state machine driving the screening workflow."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Iterable

import structlog

from ..schemas import CandidateScore, ParsedResume, WeightConfig
from .cutoff import CutoffFilter
from .invitations import DeliveryReport, InvitationSession
from .protocols import JobDescriptionParser, MessagingTransport, QuestionAnswerer, Scorer
from .scoring import ScoringCoordinator
from .transcript import ChatTranscript

JD_PARSED_MESSAGE = "✅ Job Description parsed. You can now type ‘score’ to get candidate scores."
INVALID_CUTOFF_WARNING = "⚠️ Please enter a valid numeric cutoff."
UNBALANCED_WEIGHTS_WARNING = "⚠️ Please ensure the weights sum to 100 before scoring."
NO_RESUME_WARNING = "⚠️ Please upload at least one resume before asking questions."

SCORE_TOKEN = "score"

# Leading decimal literal; trailing text is ignored ("70%" reads as 70).
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class WorkflowState(str, Enum):
    IDLE = "idle"
    AWAITING_CUTOFF = "awaiting_cutoff"


def parse_cutoff(text: str) -> float | None:
    """Read a cutoff from the start of ``text``; ``None`` when there is no number."""
    match = _NUMBER_PREFIX.match(text.strip())
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


class ConversationController:
    """Interprets each user turn and routes it to the right workflow step.

    Two modes exist: ``IDLE`` and ``AWAITING_CUTOFF``. In ``IDLE`` a turn that
    mentions "score" triggers scoring (when the weights balance) and anything
    else is a question about the first resume. In ``AWAITING_CUTOFF`` the turn
    must be a number; it filters the last score list and returns to ``IDLE``.

    The user's message is always appended before any awaited call, so the
    transcript keeps input order even when a collaborator is slow or fails.
    A failing collaborator propagates its exception and leaves the state as it
    was before the turn.
    """

    def __init__(
        self,
        *,
        resumes: Iterable[ParsedResume | dict[str, Any]],
        jd_parser: JobDescriptionParser,
        scorer: Scorer,
        answerer: QuestionAnswerer,
        transport: MessagingTransport,
        weights: WeightConfig | dict[str, float] | None = None,
        transcript: ChatTranscript | None = None,
        parallel_sends: bool = False,
    ) -> None:
        self._resumes = [ParsedResume.model_validate(item) for item in resumes]
        self._jd_parser = jd_parser
        self._answerer = answerer
        self.transcript = transcript if transcript is not None else ChatTranscript()
        if isinstance(weights, WeightConfig):
            self.weights = weights
        else:
            self.weights = WeightConfig.model_validate(weights or {})
        self._scoring = ScoringCoordinator(scorer, self.transcript)
        self._cutoff = CutoffFilter(self.transcript)
        self._invitations = InvitationSession(
            transport, self.transcript, parallel=parallel_sends
        )
        self._state = WorkflowState.IDLE
        self._turn = 0
        self._job_description: Any = None
        self._logger = structlog.get_logger(__name__)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def awaiting_cutoff(self) -> bool:
        return self._state is WorkflowState.AWAITING_CUTOFF

    @property
    def resumes(self) -> list[ParsedResume]:
        return list(self._resumes)

    @property
    def job_description(self) -> Any:
        return self._job_description

    @property
    def last_scores(self) -> list[CandidateScore]:
        return self._scoring.last_scores

    @property
    def passed_candidates(self) -> list[CandidateScore]:
        return self._invitations.passed

    @property
    def selected_recipients(self) -> list[int]:
        return self._invitations.selected

    @property
    def invitation_draft(self) -> str:
        return self._invitations.draft

    @property
    def show_invitation_step(self) -> bool:
        return self._invitations.visible

    async def submit_job_description(self, text: str) -> Any:
        if not text.strip():
            return None
        parsed = await self._jd_parser.parse_job_description(text)
        self._job_description = parsed
        self.transcript.bot(JD_PARSED_MESSAGE)
        self._logger.info("job_description.parsed")
        return parsed

    async def submit_input(self, text: str) -> None:
        question = text.strip()
        if not question:
            return

        self.transcript.user(question)
        self._turn += 1

        with structlog.contextvars.bound_contextvars(
            turn=self._turn,
            workflow_state=self._state.value,
        ):
            if self._state is WorkflowState.AWAITING_CUTOFF:
                self._handle_cutoff(question)
                return

            if SCORE_TOKEN in question.lower():
                await self._handle_score_request()
                return

            await self._handle_question(question)

    def toggle_recipient(self, index: int) -> bool:
        return self._invitations.toggle_recipient(index)

    def set_invitation_draft(self, text: str) -> None:
        self._invitations.draft = text

    async def send_invitations(self, message: str | None = None) -> DeliveryReport | None:
        return await self._invitations.send(message)

    def _handle_cutoff(self, text: str) -> None:
        cutoff = parse_cutoff(text)
        if cutoff is None:
            self.transcript.bot(INVALID_CUTOFF_WARNING)
            self._logger.info("cutoff.invalid", text=text)
            return

        passed = self._cutoff.apply(self._scoring.last_scores, cutoff)
        self._invitations.open(passed)
        self._transition(WorkflowState.IDLE)

    async def _handle_score_request(self) -> None:
        if not self.weights.is_balanced():
            self.transcript.bot(UNBALANCED_WEIGHTS_WARNING)
            self._logger.info("scoring.rejected", weight_total=self.weights.total())
            return

        await self._scoring.score(self._resumes, self._job_description, self.weights)
        self._transition(WorkflowState.AWAITING_CUTOFF)

    async def _handle_question(self, question: str) -> None:
        if not self._resumes:
            self.transcript.bot(NO_RESUME_WARNING)
            return

        resume = self._resumes[0].parsed_data.model_dump(mode="json")
        answer = await self._answerer.answer(question, resume)
        self.transcript.bot(answer)

    def _transition(self, state: WorkflowState) -> None:
        previous, self._state = self._state, state
        self._logger.info(
            "controller.state_changed",
            previous=previous.value,
            current=state.value,
        )
