"""Test utilities for the unmarkdown-mcp test suite.

This module provides a scripted stand-in for the Unmarkdown API built on
``httpx.MockTransport``, so tests exercise the real client without any
network access.
"""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from unmarkdown_mcp.client import UnmarkdownClient

TEST_API_KEY = "um_test_key"
TEST_BASE_URL = "https://api.test.unmarkdown.invalid"


@dataclass
class CannedResponse:
    """Response the fake API returns for one route."""

    status: int = 200
    payload: Any = None
    raw: bytes | None = None

    def to_httpx(self, request: httpx.Request) -> httpx.Response:
        if self.raw is not None:
            return httpx.Response(self.status, content=self.raw, request=request)
        return httpx.Response(self.status, json=self.payload, request=request)


@dataclass
class FakeUnmarkdownApi:
    """Scripted Unmarkdown API that records every request it receives.

    Routes are keyed by ``(method, raw_path)`` where ``raw_path`` keeps its
    percent-encoding. Unscripted routes answer 200 with ``{"ok": true}``.
    """

    routes: dict[tuple[str, str], CannedResponse] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    error: Exception | None = None

    def respond(self, method: str, path: str, status: int = 200, payload: Any = None, raw: bytes | None = None):
        self.routes[(method, path)] = CannedResponse(status=status, payload=payload, raw=raw)

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        canned = self.routes.get((request.method, path), CannedResponse(payload={"ok": True}))
        return canned.to_httpx(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, **kwargs: Any) -> UnmarkdownClient:
        kwargs.setdefault("base_url", TEST_BASE_URL)
        kwargs.setdefault("transport", self.transport())
        return UnmarkdownClient(TEST_API_KEY, **kwargs)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    @property
    def last_body(self) -> Any:
        content = self.last_request.content
        return json.loads(content) if content else None

    @property
    def last_raw_path(self) -> str:
        return self.last_request.url.raw_path.decode("ascii").split("?", 1)[0]

    @property
    def last_query(self) -> dict[str, str]:
        return dict(self.last_request.url.params)
