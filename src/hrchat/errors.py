"""Exception types raised by the chat workflow and its collaborators."""

from __future__ import annotations


class HRChatError(Exception):
    """Base class for all hrchat errors."""


class BackendError(HRChatError):
    """Raised when the screening backend fails or returns a malformed body."""

    def __init__(self, endpoint: str, message: str, *, status_code: int | None = None):
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint
        self.status_code = status_code


class ScoreMismatchError(HRChatError, ValueError):
    """Raised when the scorer returns a different number of scores than candidates sent."""

    def __init__(self, expected: int, received: int):
        super().__init__(f"Scorer returned {received} scores for {expected} candidates")
        self.expected = expected
        self.received = received


class DeliveryError(HRChatError):
    """Raised by a messaging transport when a single delivery fails."""


class ResumeLoadError(HRChatError, ValueError):
    """Raised when resume loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list):
        super().__init__("Resume loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Resume loading failed: {self.errors}"


__all__ = [
    "HRChatError",
    "BackendError",
    "ScoreMismatchError",
    "DeliveryError",
    "ResumeLoadError",
]
