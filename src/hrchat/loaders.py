"""Resume loading and transcript audit persistence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import pendulum
from pydantic import ValidationError

from .errors import ResumeLoadError
from .schemas import Message, ParsedResume


class ResumeLoader:
    """Load pre-parsed resumes from ``.json`` or ``.jsonl`` files.

    A ``.json`` file holds either a list of records or an object with a
    ``resumes`` list. Invalid records are collected and reported together
    through :class:`ResumeLoadError`, which also carries the valid ones.
    """

    def load(self, path: Path) -> list[ParsedResume]:
        resumes: list[ParsedResume] = []
        errors: list[str] = []
        for label, record in self._records(path, errors):
            if not isinstance(record, dict):
                errors.append(f"{label}: expected an object")
                continue
            try:
                resumes.append(ParsedResume.model_validate(record))
            except ValidationError as exc:
                errors.append(f"{label}: {exc.errors()[0]['msg']}")
        if errors:
            raise ResumeLoadError(errors, resumes)
        return resumes

    def _records(self, path: Path, errors: list[str]) -> Iterator[tuple[str, Any]]:
        if path.suffix.lower() == ".jsonl":
            with path.open("r", encoding="utf-8") as handle:
                for idx, line in enumerate(handle, start=1):
                    raw = line.strip()
                    if not raw:
                        continue
                    try:
                        yield f"line {idx}", json.loads(raw)
                    except json.JSONDecodeError as exc:
                        errors.append(f"line {idx}: invalid JSON ({exc})")
            return

        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ResumeLoadError([f"invalid JSON ({exc})"], []) from exc
        if isinstance(data, dict):
            data = data.get("resumes")
        if not isinstance(data, list):
            raise ResumeLoadError(["expected a list of resumes"], [])
        for idx, record in enumerate(data):
            yield f"record {idx}", record


class TranscriptAuditLogger:
    """Append-only audit logger writing one JSON line per transcript message."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def __call__(self, message: Message) -> None:
        self.append(
            {
                "sender": message.sender.value,
                "text": message.text,
                "timestamp": pendulum.now().to_iso8601_string(),
            }
        )

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")
