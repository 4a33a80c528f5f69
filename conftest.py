"""
Shared pytest fixtures.

Every upstream call goes through `apps.core.services.upstream_client.new_session`,
so patching that factory with an `httpx.MockTransport` fakes the whole
upstream API for a test.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from apps.core.services import upstream_client
from apps.rewards.conf import get_project_registry

type Route = httpx.Response | Callable[[httpx.Request], httpx.Response] | Exception


class FakeUpstream:
    """Path-keyed router standing in for the upstream API (paths relative to BASE_URL)."""

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, route: Route | None = None, **response_kwargs: Any) -> None:
        self.routes[path] = route if route is not None else httpx.Response(200, **response_kwargs)

    def add_rows(self, rows_by_user: dict[str, list[Any]]) -> None:
        """Serve `/kaito/leaderboard-search` from a username ➜ rows mapping."""

        def _search(request: httpx.Request) -> httpx.Response:
            username = request.url.params.get("username", "")
            return httpx.Response(200, json={"data": rows_by_user.get(username, [])})

        self.add("/kaito/leaderboard-search", _search)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"detail": "no such route"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route


@pytest.fixture
def upstream(monkeypatch: pytest.MonkeyPatch) -> FakeUpstream:
    fake = FakeUpstream()

    def _new_session(**kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(fake.handler), **kwargs)

    monkeypatch.setattr(upstream_client, "new_session", _new_session)
    return fake


@pytest.fixture(autouse=True)
def _fresh_project_registry():
    get_project_registry.cache_clear()
    yield
    get_project_registry.cache_clear()
