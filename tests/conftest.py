"""Shared fixtures: test settings and an in-memory Context Repo backend."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from core.api_client import ApiClient
from core.config import Settings

TEST_API_KEY = "gm_test_secret_key"
TEST_BASE_URL = "https://api.contextrepo.test"


class FakeBackend:
    """Records every request and answers from a (method, path) route table.

    Routes match on the URL path only; the query string is left for the
    test to assert on.  Unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], httpx.Response | Exception] = {}

    def respond(self, method: str, path: str, payload: Any = None, status: int = 200) -> None:
        if payload is None:
            self._routes[(method, path)] = httpx.Response(status)
        else:
            self._routes[(method, path)] = httpx.Response(status, json=payload)

    def respond_raw(self, method: str, path: str, content: bytes, status: int = 200) -> None:
        self._routes[(method, path)] = httpx.Response(status, content=content)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self._routes[(method, path)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": {"message": "no route"}})
        if isinstance(route, Exception):
            raise route
        return httpx.Response(
            route.status_code,
            headers=route.headers,
            content=route.content,
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=TEST_API_KEY, api_base_url=TEST_BASE_URL)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(settings: Settings, backend: FakeBackend) -> ApiClient:
    return ApiClient(settings, transport=backend.transport())
