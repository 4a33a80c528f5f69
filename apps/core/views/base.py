"""Base API view that maps upstream failures onto a 502 envelope."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from apps.core.conf import UPSTREAM_ERROR_CODE
from apps.core.services.upstream_client import UpstreamError
from common.views_utils import BaseAppView, OrjsonResponse

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse

log = structlog.get_logger(__name__).bind(component="UpstreamAppView")


class UpstreamAppView(BaseAppView):
    """
    `BaseAppView` for endpoints whose payload depends on the upstream API.

    An `UpstreamError` is a request-scoped, recoverable failure: the client
    sees a 502 with `{error, detail}` and may simply retry the lookup.
    """

    def handle_exception(self, request: HttpRequest, exc: Exception) -> HttpResponse:
        if isinstance(exc, UpstreamError):
            log.warning("Upstream failure", path=request.path, err=str(exc), status=exc.status)
            return OrjsonResponse({"error": UPSTREAM_ERROR_CODE, "detail": str(exc)}, status=502)
        return super().handle_exception(request, exc)
