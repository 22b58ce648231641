"""Shared fixtures: an in-memory HTTP client that records requests."""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest
import requests


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, body: Any = None, status_code: int = 200, lines: list[str] | None = None) -> None:
        self.body = body
        self.status_code = status_code
        self.lines = lines or []

    def json(self) -> Any:
        return self.body

    def iter_lines(self, decode_unicode: bool = False):
        for line in self.lines:
            yield line if decode_unicode else line.encode("utf-8")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeHttpClient:
    """Record every request and answer with queued responses or a callback."""

    def __init__(self, responses: list[FakeResponse] | Callable[..., FakeResponse] | None = None) -> None:
        self.responses = responses if responses is not None else []
        self.requests: list[dict[str, Any]] = []

    @property
    def request_count(self) -> int:
        return len(self.requests)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        # Serialize like requests would so tests see the wire body
        body = json.loads(json.dumps(kwargs.get("json")))
        call = {"method": method, "url": url, "json": body, **{k: v for k, v in kwargs.items() if k != "json"}}
        self.requests.append(call)
        if callable(self.responses):
            return self.responses(method, url, body)
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse({"model": "x", "message": {"role": "assistant", "content": "ok"}, "done": True})


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def chat_response() -> Callable[[str], FakeResponse]:
    def build(content: str = "ok") -> FakeResponse:
        return FakeResponse({"model": "llama3.2", "message": {"role": "assistant", "content": content}, "done": True})

    return build


@pytest.fixture
def fake_response() -> Callable[..., FakeResponse]:
    """Factory for canned responses: ``fake_response(body, status_code=..., lines=[...])``."""
    return FakeResponse
