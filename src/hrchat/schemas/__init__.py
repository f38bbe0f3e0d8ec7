"""Pydantic schema definitions shared by the workflow and its collaborators."""

from __future__ import annotations

from .chat import Message, Sender
from .resume import CandidateScore, ParsedResume, ResumeData, PLACEHOLDER_EMAIL
from .weights import REQUIRED_TOTAL, WeightConfig

__all__ = [
    "CandidateScore",
    "Message",
    "ParsedResume",
    "PLACEHOLDER_EMAIL",
    "REQUIRED_TOTAL",
    "ResumeData",
    "Sender",
    "WeightConfig",
]
