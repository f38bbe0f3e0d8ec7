"""Append-only chat transcript."""

from __future__ import annotations

from typing import Callable, Iterator, Sequence

import structlog

from ..schemas import Message, Sender

TranscriptListener = Callable[[Message], None]


class ChatTranscript(Sequence[Message]):
    """Ordered record of every message exchanged in a session.

    Messages are only ever appended. Listeners registered through
    :meth:`subscribe` are called synchronously for each new message, in
    registration order.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._listeners: list[TranscriptListener] = []
        self._logger = structlog.get_logger(__name__)

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return tuple(self._messages[index])
        return self._messages[index]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def append(self, message: Message) -> Message:
        self._messages.append(message)
        self._logger.debug("transcript.appended", sender=message.sender.value, text=message.text)
        for listener in self._listeners:
            listener(message)
        return message

    def user(self, text: str) -> Message:
        return self.append(Message.from_user(text))

    def bot(self, text: str) -> Message:
        return self.append(Message.from_bot(text))

    def subscribe(self, listener: TranscriptListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def texts(self, sender: Sender | None = None) -> list[str]:
        return [m.text for m in self._messages if sender is None or m.sender == sender]


def format_number(value: float) -> str:
    """Render a number the way it is shown in chat: ``80`` rather than ``80.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
