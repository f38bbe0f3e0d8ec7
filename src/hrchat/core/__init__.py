"""Core conversation workflow components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .controller import ConversationController, WorkflowState, parse_cutoff
from .cutoff import CutoffFilter
from .invitations import DeliveryReport, InvitationSession
from .protocols import (
    JobDescriptionParser,
    MessagingTransport,
    QuestionAnswerer,
    Scorer,
)
from .scoring import ScoringCoordinator
from .transcript import ChatTranscript, format_number

__all__ = [
    "ChatTranscript",
    "ConversationController",
    "CutoffFilter",
    "DeliveryReport",
    "InvitationSession",
    "JobDescriptionParser",
    "MessagingTransport",
    "QuestionAnswerer",
    "Scorer",
    "ScoringCoordinator",
    "WorkflowState",
    "format_number",
    "parse_cutoff",
]
