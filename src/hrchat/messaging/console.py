"""Transport that records deliveries instead of sending them."""

from __future__ import annotations

from dataclasses import dataclass

import structlog


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    name: str
    email: str
    body: str


class ConsoleTransport:
    """Log every invitation and keep it in :attr:`outbox`. Never fails."""

    def __init__(self) -> None:
        self.outbox: list[OutboundMessage] = []
        self._logger = structlog.get_logger(__name__)

    async def send(self, name: str, email: str, body: str) -> None:
        self.outbox.append(OutboundMessage(name=name, email=email, body=body))
        self._logger.info("invitation.console_delivery", to_name=name, to_email=email, message=body)
