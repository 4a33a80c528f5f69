# apps/proxy/services/forwarder.py
# ================================================================================
"""
Relay a Django request to the upstream API and mirror the answer back.

Method, query string and body are preserved (no body for GET/HEAD); only the
rule's allow-listed request headers travel upstream. Response headers that
describe the upstream connection are dropped and CORS headers are added.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import httpx
import structlog
from django.conf import settings
from django.http import HttpResponse

from apps.core.conf import HOP_BY_HOP_HEADERS
from apps.core.services import upstream_client
from apps.proxy.conf import USERNAME_REQUIRED, YAP_OPEN_RULE
from common.views_utils import OrjsonResponse

if TYPE_CHECKING:
    from django.http import HttpRequest

    from apps.proxy.conf import ForwardRule

log = structlog.get_logger(__name__).bind(component="ProxyForwarder")

# httpx hands back a decoded body, so its length is recomputed locally.
_DROPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length"}
_BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def upstream_url(rule: ForwardRule, path: str, query: str = "") -> str:
    base = settings.UPSTREAM_API_CONFIG.BASE_URL.rstrip("/")
    url = f"{base}/{rule.namespace}/{path.lstrip('/')}"
    return f"{url}?{query}" if query else url


def with_cors(response: HttpResponse, rule: ForwardRule) -> HttpResponse:
    response["Access-Control-Allow-Origin"] = "*"
    response["Access-Control-Allow-Methods"] = rule.allow_methods
    response["Access-Control-Allow-Headers"] = rule.allow_headers
    return response


def preflight(rule: ForwardRule) -> HttpResponse:
    return with_cors(HttpResponse(status=204), rule)


def _forwarded_headers(request: HttpRequest, rule: ForwardRule) -> dict[str, str]:
    headers = dict(rule.default_request_headers)
    for name in rule.request_headers:
        value = request.headers.get(name)
        if value:
            headers[name] = value
    return headers


def _proxy_error(rule: ForwardRule, exc: Exception, url: str) -> HttpResponse:
    log.warning("Proxy forwarding failed", namespace=rule.namespace, url=url, err=str(exc))
    body = {"error": rule.error_message, "detail": str(exc)}
    return with_cors(OrjsonResponse(body, status=rule.error_status), rule)


async def forward(request: HttpRequest, rule: ForwardRule, path: str) -> HttpResponse:
    """Relay `request` to `<BASE_URL>/<namespace>/<path>` and mirror the reply."""
    method = request.method.upper()
    url = upstream_url(rule, path, request.META.get("QUERY_STRING", ""))
    content = None if method in _BODYLESS_METHODS else request.body

    start_time = time.perf_counter()
    try:
        async with upstream_client.new_session() as session:
            upstream = await session.request(
                method, url, headers=_forwarded_headers(request, rule), content=content
            )
    except httpx.HTTPError as exc:
        return _proxy_error(rule, exc, url)

    response = HttpResponse(upstream.content, status=upstream.status_code)
    for key, value in upstream.headers.items():
        if key.lower() not in _DROPPED_RESPONSE_HEADERS:
            response[key] = value

    log.debug(
        "Proxied request",
        method=method,
        url=url,
        status=upstream.status_code,
        duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
    )
    return with_cors(response, rule)


async def yap_open(request: HttpRequest) -> HttpResponse:
    """
    Relay `/yap/open?username=`; upstream JSON is passed through with 200 on
    success, otherwise with the upstream status.
    """
    rule = YAP_OPEN_RULE
    username = request.GET.get("username", "").strip()
    if not username:
        return with_cors(OrjsonResponse({"error": USERNAME_REQUIRED}, status=400), rule)

    url = upstream_url(rule, "open")
    try:
        async with upstream_client.new_session() as session:
            upstream = await session.get(url, params={"username": username})
        data = upstream.json()
    except (httpx.HTTPError, ValueError) as exc:
        return _proxy_error(rule, exc, url)

    status = 200 if upstream.is_success else upstream.status_code
    return with_cors(OrjsonResponse(data, status=status), rule)
