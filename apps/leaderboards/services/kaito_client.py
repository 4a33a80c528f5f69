"""
Concrete upstream clients built on BaseUpstreamClient.

`KaitoClient` serves leaderboard rows and follower stats, `YapClient` serves
yap counters. Both take an optional shared session so one request scope opens
a single connection pool.
"""

from __future__ import annotations

from typing import Any

import structlog

from apps.core.services.upstream_client import BaseUpstreamClient
from apps.leaderboards.conf import (
    KAITO_NAMESPACE,
    LEADERBOARD_SEARCH_PATH,
    USER_STATUS_PATH,
    YAP_NAMESPACE,
    YAPS_OPEN_PATH,
)
from apps.leaderboards.services.normalizer import extract_rows

log = structlog.get_logger(__name__).bind(client="KaitoClient")


def _data_object(payload: Any) -> dict[str, Any]:
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return {}


class KaitoClient(BaseUpstreamClient):
    namespace = KAITO_NAMESPACE

    async def leaderboard_search(self, username: str) -> list[dict[str, Any]]:
        payload = await self._get_json(LEADERBOARD_SEARCH_PATH, params={"username": username})
        rows = extract_rows(payload)
        log.debug("leaderboard rows fetched", username=username, rows=len(rows))
        return rows

    async def user_status(self, username: str) -> dict[str, Any]:
        payload = await self._get_json(USER_STATUS_PATH, params={"username": username})
        return _data_object(payload)


class YapClient(BaseUpstreamClient):
    namespace = YAP_NAMESPACE

    async def open(self, username: str) -> dict[str, Any]:
        payload = await self._get_json(YAPS_OPEN_PATH, params={"username": username})
        return _data_object(payload)
