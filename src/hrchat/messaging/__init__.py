"""Invitation delivery transports."""

from __future__ import annotations

from ..core.protocols import MessagingTransport
from .console import ConsoleTransport
from .emailjs import EmailJSTransport

__all__ = ["ConsoleTransport", "EmailJSTransport", "MessagingTransport"]
