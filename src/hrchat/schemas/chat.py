"""Chat transcript message schema."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Sender(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """Single transcript entry. Frozen once created."""

    sender: Sender
    text: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_user(cls, text: str) -> "Message":
        return cls(sender=Sender.USER, text=text)

    @classmethod
    def from_bot(cls, text: str) -> "Message":
        return cls(sender=Sender.BOT, text=text)
