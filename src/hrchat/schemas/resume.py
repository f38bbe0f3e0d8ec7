from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLACEHOLDER_EMAIL = "no-email@example.com"


class ResumeData(BaseModel):
    """Structured fields produced by the upstream resume parser."""

    name: str | None = None
    email: str | None = None

    model_config = ConfigDict(extra="allow")


class ParsedResume(BaseModel):
    """A pre-parsed resume as handed to the chat workflow."""

    filename: str | None = None
    parsed_data: ResumeData = Field(default_factory=ResumeData)

    model_config = ConfigDict(extra="allow")

    @field_validator("parsed_data", mode="before")
    @classmethod
    def _default_missing_data(cls, value: Any) -> Any:
        return {} if value is None else value

    def display_name(self, position: int) -> str:
        """Return the candidate name, or a placeholder for the 0-based ``position``."""
        return self.parsed_data.name or f"Candidate {position + 1}"

    def contact_email(self) -> str:
        return self.parsed_data.email or PLACEHOLDER_EMAIL


class CandidateScore(BaseModel):
    """Named, addressable score for one candidate."""

    name: str
    email: str
    score: float

    model_config = ConfigDict(frozen=True)
