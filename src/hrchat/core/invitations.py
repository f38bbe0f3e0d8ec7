"""Recipient selection and invitation dispatch."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Sequence

import structlog

from ..schemas import CandidateScore
from .protocols import MessagingTransport
from .transcript import ChatTranscript

NO_RECIPIENT_WARNING = "⚠️ Please select at least one recipient."
BLANK_MESSAGE_WARNING = "⚠️ Please enter a message to send."
STEP_CLOSED_WARNING = "⚠️ No candidates are open for invitation. Filter a new score list first."


@dataclass(slots=True)
class DeliveryReport:
    """Outcome of one send operation, as recipient emails."""

    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.sent) + len(self.failed)


class InvitationSession:
    """Holds the passed candidates, the recipient selection and the draft.

    Selection is kept in toggle order, which is also the order deliveries are
    attempted and reported in. Every delivery is independent: a failing
    recipient never prevents the others from being tried.
    """

    def __init__(
        self,
        transport: MessagingTransport,
        transcript: ChatTranscript,
        *,
        parallel: bool = False,
    ) -> None:
        self._transport = transport
        self._transcript = transcript
        self._parallel = parallel
        self._passed: list[CandidateScore] = []
        self._selected: list[int] = []
        self._visible = False
        self.draft = ""
        self._logger = structlog.get_logger(__name__)

    @property
    def passed(self) -> list[CandidateScore]:
        return list(self._passed)

    @property
    def selected(self) -> list[int]:
        return list(self._selected)

    @property
    def visible(self) -> bool:
        return self._visible and bool(self._passed)

    def open(self, passed: Sequence[CandidateScore]) -> None:
        """Install a freshly filtered pass list and reset the selection."""
        self._passed = list(passed)
        self._selected = []
        self._visible = bool(self._passed)

    def toggle_recipient(self, index: int) -> bool:
        """Flip ``index`` in the selection and return whether it is now selected."""
        if not self.visible:
            raise IndexError("No invitation step is open")
        if not 0 <= index < len(self._passed):
            raise IndexError(f"Recipient index out of range: {index}")
        if index in self._selected:
            self._selected.remove(index)
            return False
        self._selected.append(index)
        return True

    async def send(self, message: str | None = None) -> DeliveryReport | None:
        """Deliver the draft to every selected recipient.

        Returns ``None`` when a precondition fails; the warning is appended to
        the transcript and nothing is sent.
        """
        if not self.visible:
            self._transcript.bot(STEP_CLOSED_WARNING)
            return None

        if message is not None:
            self.draft = message

        if not self._selected:
            self._transcript.bot(NO_RECIPIENT_WARNING)
            return None
        if not self.draft.strip():
            self._transcript.bot(BLANK_MESSAGE_WARNING)
            return None

        recipients = [self._passed[idx] for idx in self._selected]
        body = self.draft

        if self._parallel:
            outcomes = await asyncio.gather(
                *(self._deliver(candidate, body) for candidate in recipients)
            )
        else:
            outcomes = [await self._deliver(candidate, body) for candidate in recipients]

        report = DeliveryReport()
        for candidate, ok in zip(recipients, outcomes):
            (report.sent if ok else report.failed).append(candidate.email)

        if report.sent:
            self._transcript.bot(f"✅ Invitations sent to: {', '.join(report.sent)}")
        if report.failed:
            self._transcript.bot(f"❌ Failed to send to: {', '.join(report.failed)}")

        self._logger.info(
            "invitation.batch_completed",
            sent=report.sent,
            failed=report.failed,
            parallel=self._parallel,
        )
        self.reset()
        return report

    def reset(self) -> None:
        self._passed = []
        self._selected = []
        self.draft = ""
        self._visible = False

    async def _deliver(self, candidate: CandidateScore, body: str) -> bool:
        try:
            await self._transport.send(candidate.name, candidate.email, body)
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "invitation.failed",
                recipient=candidate.email,
                error=str(exc),
            )
            return False
        self._logger.info("invitation.sent", recipient=candidate.email)
        return True
