# apps/users/views.py
# ======================================================================
"""Asynchronous API views for the 'users' application."""

from __future__ import annotations

import asyncio
from typing import Any

from django.core.exceptions import BadRequest
from django.http import HttpRequest

from apps.core.services import upstream_client
from apps.core.views.base import UpstreamAppView
from apps.leaderboards.services.kaito_client import KaitoClient, YapClient
from apps.rewards.conf import get_project_registry
from apps.rewards.serializers import ProjectSerializer
from common.parsers_utils import as_finite_number, clean_handle


def _count(data: dict[str, Any], key: str) -> int | float:
    value = as_finite_number(data.get(key))
    if value is None:
        return 0
    return int(value) if value.is_integer() else value


class UserSummaryView(UpstreamAppView):
    """GET /api/v1/users/{handle} – counters for the dashboard header."""

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        handle = clean_handle(kwargs["handle"])
        if not handle:
            msg = "A username is required."
            raise BadRequest(msg)
        return {"handle": handle}

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        handle = p["handle"]
        async with upstream_client.new_session() as session:
            async with KaitoClient(session=session) as kaito, YapClient(session=session) as yap:
                try:
                    async with asyncio.TaskGroup() as tg:
                        status_task = tg.create_task(kaito.user_status(handle))
                        yaps_task = tg.create_task(yap.open(handle))
                except ExceptionGroup as eg:
                    raise eg.exceptions[0] from eg

        status, yaps = status_task.result(), yaps_task.result()
        return {
            "handle": handle,
            "follower_count": _count(status, "follower_count"),
            "smart_follower_count": _count(status, "smart_follower_count"),
            "yaps_all": _count(yaps, "yaps_all"),
            "yaps_l24h": _count(yaps, "yaps_l24h"),
            **ProjectSerializer.serialize_catalog(get_project_registry()),
        }
