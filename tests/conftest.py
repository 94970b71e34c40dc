"""Shared test helpers: an ASGI send recorder and a recording log."""

import json
from typing import Any

import pytest


class SendRecorder:
    """Collects ASGI messages passed to ``send()``."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def start(self) -> dict[str, Any]:
        return self.messages[0]

    @property
    def status(self) -> int:
        return self.start["status"]

    @property
    def headers(self) -> dict[str, str]:
        return {
            name.decode("latin-1"): value.decode("latin-1")
            for name, value in self.start["headers"]
        }

    def header_list(self, name: str) -> list[str]:
        wanted = name.lower().encode("latin-1")
        return [value.decode("latin-1") for n, value in self.start["headers"] if n == wanted]

    @property
    def body(self) -> bytes:
        return b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )

    def json(self) -> Any:
        return json.loads(self.body)


class RecordingLog:
    """``Log`` that remembers every ``error(tag, error)`` call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, BaseException]] = []

    def error(self, tag: str, error: BaseException) -> None:
        self.calls.append((tag, error))


@pytest.fixture
def sent() -> SendRecorder:
    return SendRecorder()


@pytest.fixture
def log() -> RecordingLog:
    return RecordingLog()
