"""HTTP client for the resume-screening backend."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from .errors import BackendError


class HTTPBackendClient:
    """Async client for the ``/parse_jd``, ``/score`` and ``/chat`` endpoints.

    One instance satisfies the job-description parser, scorer and
    question-answerer contracts used by the conversation controller.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = structlog.get_logger(__name__)

    async def parse_job_description(self, text: str) -> Any:
        body = await self._post("/parse_jd", {"jd_text": text})
        if "parsed_jd" not in body:
            raise BackendError("/parse_jd", "response is missing 'parsed_jd'")
        return body["parsed_jd"]

    async def score(
        self,
        candidates: list[dict[str, Any]],
        job_description: Any,
        *,
        weights: dict[str, float],
    ) -> list[float]:
        body = await self._post(
            "/score",
            {
                "candidates": candidates,
                "job_description": job_description,
                "weights": weights,
            },
        )
        scored = body.get("scored_candidates") or []
        if not isinstance(scored, list):
            raise BackendError("/score", "'scored_candidates' must be a list")
        try:
            return [float(item["score"]) for item in scored]
        except (KeyError, TypeError, ValueError) as exc:
            raise BackendError("/score", f"malformed score entry ({exc})") from exc

    async def answer(self, question: str, resume: dict[str, Any]) -> str:
        body = await self._post("/chat", {"question": question, "resume": resume})
        answer = body.get("answer")
        if not isinstance(answer, str):
            raise BackendError("/chat", "response is missing 'answer'")
        return answer

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(path, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                self._logger.warning(
                    "backend.request_failed",
                    path=path,
                    status_code=exc.response.status_code,
                )
                raise BackendError(
                    path,
                    f"HTTP {exc.response.status_code}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.HTTPError as exc:
                self._logger.warning("backend.request_failed", path=path, error=str(exc))
                raise BackendError(path, str(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise BackendError(path, "response is not valid JSON") from exc
        if not isinstance(body, dict):
            raise BackendError(path, "response must be a JSON object")
        self._logger.debug("backend.response", path=path, status_code=response.status_code)
        return body
