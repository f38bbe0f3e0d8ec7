from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from hrchat.backend import HTTPBackendClient
from hrchat.core import JobDescriptionParser, QuestionAnswerer, Scorer
from hrchat.errors import BackendError


def build_client(handler) -> tuple[HTTPBackendClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = HTTPBackendClient(
        "http://backend.test/",
        transport=httpx.MockTransport(recording_handler),
    )
    return client, requests


def test_client_satisfies_collaborator_protocols():
    client = HTTPBackendClient("http://backend.test")

    assert isinstance(client, JobDescriptionParser)
    assert isinstance(client, Scorer)
    assert isinstance(client, QuestionAnswerer)


def test_parse_job_description_posts_text():
    client, requests = build_client(
        lambda request: httpx.Response(200, json={"parsed_jd": {"skills": ["Python"]}})
    )

    parsed = asyncio.run(client.parse_job_description("Python developer"))

    assert parsed == {"skills": ["Python"]}
    assert requests[0].url == "http://backend.test/parse_jd"
    assert json.loads(requests[0].content) == {"jd_text": "Python developer"}


def test_score_sends_candidates_job_and_weights():
    client, requests = build_client(
        lambda request: httpx.Response(
            200, json={"scored_candidates": [{"score": 81.5}, {"score": "64"}]}
        )
    )
    candidates = [{"parsed_data": {"name": "A"}}, {"parsed_data": {"name": "B"}}]
    weights = {"skills": 50, "education": 20, "experience": 20, "certifications": 10}

    scores = asyncio.run(client.score(candidates, {"skills": []}, weights=weights))

    assert scores == [81.5, 64.0]
    assert requests[0].url.path == "/score"
    assert json.loads(requests[0].content) == {
        "candidates": candidates,
        "job_description": {"skills": []},
        "weights": weights,
    }


def test_score_without_results_returns_empty_list():
    client, _ = build_client(lambda request: httpx.Response(200, json={}))

    assert asyncio.run(client.score([], None, weights={})) == []


def test_malformed_score_entry_raises():
    client, _ = build_client(
        lambda request: httpx.Response(200, json={"scored_candidates": [{"rank": 1}]})
    )

    with pytest.raises(BackendError):
        asyncio.run(client.score([{}], None, weights={}))


def test_answer_returns_text():
    client, requests = build_client(
        lambda request: httpx.Response(200, json={"answer": "Five years of Go."})
    )

    answer = asyncio.run(client.answer("Experience?", {"name": "A"}))

    assert answer == "Five years of Go."
    assert json.loads(requests[0].content) == {"question": "Experience?", "resume": {"name": "A"}}


def test_http_error_raises_backend_error():
    client, _ = build_client(lambda request: httpx.Response(503, text="busy"))

    with pytest.raises(BackendError) as exc:
        asyncio.run(client.answer("Experience?", {}))

    assert exc.value.status_code == 503
    assert exc.value.endpoint == "/chat"


def test_non_json_body_raises_backend_error():
    client, _ = build_client(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(BackendError):
        asyncio.run(client.parse_job_description("text"))


def test_connection_error_raises_backend_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client, _ = build_client(refuse)

    with pytest.raises(BackendError):
        asyncio.run(client.parse_job_description("text"))
