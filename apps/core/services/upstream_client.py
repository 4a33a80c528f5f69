# apps/core/services/upstream_client.py
# ================================================================================
"""
Async base client for the upstream leaderboard API.

One `httpx.AsyncClient` per request scope, shared by every concrete client
entered with the same session. There are no retries: a failed call surfaces
as `UpstreamError` immediately so the caller can show a "failed to load"
state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

import httpx
import structlog
from django.conf import settings

from apps.core.conf import DEFAULT_TIMEOUT_S, USER_AGENT

if TYPE_CHECKING:
    from collections.abc import Mapping

module_log = structlog.get_logger(__name__).bind(component="UpstreamClient")


class UpstreamError(RuntimeError):
    """Raised when the upstream API is unreachable or answers with garbage."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


def new_session(**kwargs: Any) -> httpx.AsyncClient:
    """
    Build the shared HTTP session.

    Kept as a module-level factory so tests can swap the transport.
    """
    timeout = getattr(settings.UPSTREAM_API_CONFIG, "TIMEOUT_S", DEFAULT_TIMEOUT_S)
    kwargs.setdefault("timeout", timeout)
    kwargs.setdefault("headers", {"User-Agent": USER_AGENT})
    return httpx.AsyncClient(**kwargs)


class BaseUpstreamClient:
    """
    Template class for concrete upstream clients.

    Subclasses set `namespace` (e.g. "kaito") and call `_get_json` with a
    path relative to it.
    """

    namespace: str = ""

    def __init__(self, *, session: httpx.AsyncClient | None = None, base_url: str | None = None) -> None:
        root = base_url or settings.UPSTREAM_API_CONFIG.BASE_URL
        self.base_url = f"{root.rstrip('/')}/{self.namespace}".rstrip("/")
        self.log = module_log.bind(client=self.__class__.__name__)
        self._session = session
        self._session_created = False

    # ------------------------------------------------------------- context
    async def __aenter__(self) -> Self:
        if self._session is None:
            self._session = new_session()
            self._session_created = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session_created and self._session:
            await self._session.aclose()
            self._session = None
            self._session_created = False

    @property
    def session(self) -> httpx.AsyncClient:
        if self._session is None:
            msg = "session not ready; use the client as an async context manager"
            raise RuntimeError(msg)
        return self._session

    # ------------------------------------------------------------- helpers
    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        url = self.url_for(path)
        try:
            resp = await self.session.get(url, params=params)
        except httpx.HTTPError as exc:
            self.log.warning("upstream request failed", url=url, err=str(exc))
            msg = f"Upstream request to {path} failed: {exc}"
            raise UpstreamError(msg, url=url) from exc

        if not resp.is_success:
            self.log.warning("upstream returned error status", url=url, status=resp.status_code)
            msg = f"Upstream {path} answered HTTP {resp.status_code}"
            raise UpstreamError(msg, url=url, status=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            self.log.warning("upstream returned non-JSON body", url=url)
            msg = f"Upstream {path} returned an invalid JSON body"
            raise UpstreamError(msg, url=url, status=resp.status_code) from exc
