# apps/proxy/views.py
# ======================================================================
"""Pass-through views for `/api/kaito/...` and `/api/yap/...`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from apps.proxy.conf import PROXY_RULES, YAP_OPEN_RULE
from apps.proxy.services import forward, preflight, yap_open
from common.views_utils import BaseAsyncView

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse


class ProxyView(BaseAsyncView):
    """
    Relays any method to one upstream namespace.

    Configure with `ProxyView.as_view(namespace="kaito")`.
    """

    namespace: str = ""

    async def options(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        return preflight(PROXY_RULES[self.namespace])

    async def _forward(self, request: HttpRequest, path: str = "") -> HttpResponse:
        return await forward(request, PROXY_RULES[self.namespace], path)

    get = post = put = patch = delete = head = _forward


class YapOpenView(BaseAsyncView):
    """GET/HEAD/OPTIONS /api/yap/open?username=."""

    http_method_names = ["get", "head", "options"]

    async def options(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        return preflight(YAP_OPEN_RULE)

    async def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        return await yap_open(request)

    head = get
