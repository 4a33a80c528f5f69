# apps/core/views/health.py
"""
Starlette health endpoint, served outside Django's URLconf.

`?check=basic` answers liveness without touching anything. The full check
asks the upstream host for any HTTP answer and loads the project registry.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from django.conf import settings
from django.utils import timezone
from starlette.responses import JSONResponse

from apps.core.services import upstream_client

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request

log = structlog.get_logger(__name__).bind(component="HealthCheck")

type CheckResult = dict[str, Any]


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


async def _upstream_reachable() -> CheckResult:
    # Any status code proves the host answers; only transport errors fail.
    start = time.perf_counter()
    try:
        async with upstream_client.new_session() as session:
            resp = await session.head(settings.UPSTREAM_API_CONFIG.BASE_URL)
    except httpx.HTTPError as exc:
        log.warning("Upstream unreachable", err=str(exc))
        return {"status": "unhealthy", "error": str(exc)}
    return {"status": "healthy", "http_status": resp.status_code, "response_time_ms": _elapsed_ms(start)}


async def _projects_loadable() -> CheckResult:
    from apps.rewards.conf import get_project_registry

    try:
        registry = get_project_registry()
    except Exception as exc:
        log.error("Project registry failed to load", err=str(exc))
        return {"status": "unhealthy", "error": str(exc)}
    return {"status": "healthy", "projects": len(registry)}


READINESS_CHECKS: dict[str, Callable[[], Awaitable[CheckResult]]] = {
    "upstream": _upstream_reachable,
    "application": _projects_loadable,
}


async def health_check(request: Request) -> JSONResponse:
    start = time.perf_counter()
    meta = {
        "timestamp": timezone.now().isoformat(),
        "version": getattr(settings, "APP_VERSION", "unknown"),
        "environment": getattr(settings, "ENVIRONMENT", "unknown"),
    }
    if request.query_params.get("check") == "basic":
        return JSONResponse({"status": "ok", **meta})

    results = await asyncio.gather(*(check() for check in READINESS_CHECKS.values()))
    checks = dict(zip(READINESS_CHECKS, results, strict=True))
    healthy = all(result["status"] == "healthy" for result in results)

    return JSONResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "checks": checks,
            "response_time_ms": _elapsed_ms(start),
            **meta,
        },
        status_code=200 if healthy else 503,
    )
