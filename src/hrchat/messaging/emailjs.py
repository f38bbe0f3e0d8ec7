"""EmailJS REST transport."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..errors import DeliveryError

DEFAULT_ENDPOINT = "https://api.emailjs.com/api/v1.0/email/send"


class EmailJSTransport:
    """Send invitations through an EmailJS service template.

    The template receives ``to_name``, ``to_email`` and ``message``.
    """

    def __init__(
        self,
        *,
        service_id: str | None,
        template_id: str | None,
        public_key: str | None,
        private_key: str | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        missing = [
            label
            for label, value in (
                ("service_id", service_id),
                ("template_id", template_id),
                ("public_key", public_key),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"EmailJS transport requires: {', '.join(missing)}")
        self._service_id = service_id
        self._template_id = template_id
        self._public_key = public_key
        self._private_key = private_key
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport
        self._logger = structlog.get_logger(__name__)

    def build_payload(self, name: str, email: str, body: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "service_id": self._service_id,
            "template_id": self._template_id,
            "user_id": self._public_key,
            "template_params": {
                "to_name": name,
                "to_email": email,
                "message": body,
            },
        }
        if self._private_key:
            payload["accessToken"] = self._private_key
        return payload

    async def send(self, name: str, email: str, body: str) -> None:
        payload = self.build_payload(name, email, body)
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self._endpoint, json=payload)
            except httpx.HTTPError as exc:
                raise DeliveryError(f"EmailJS request failed for {email}: {exc}") from exc
        if response.status_code >= 400:
            raise DeliveryError(
                f"EmailJS rejected {email}: HTTP {response.status_code} {response.text}"
            )
        self._logger.debug("emailjs.accepted", to_email=email, status_code=response.status_code)
