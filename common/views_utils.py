# common/views_utils.py
# ======================================================================
"""
Shared plumbing for the JSON API views.

`BaseAsyncView` owns the error envelope, `BaseAppView` owns the GET
lifecycle. Concrete views only describe their parameters and payload.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Final

import orjson
import structlog
from django.core.exceptions import BadRequest
from django.http import Http404, HttpRequest, HttpResponse
from django.views import View

log = structlog.get_logger(__name__).bind(component="ViewsUtils")

_ORJSON_OPTIONS: Final[int] = orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})

# Client mistakes answered with `{"detail": ...}`, checked in order.
_CLIENT_ERRORS: Final[tuple[tuple[type[Exception], int, str], ...]] = (
    (Http404, 404, "Not found."),
    (BadRequest, 400, "Bad request."),
)


def _encode_fallback(obj: Any) -> Any:
    """orjson `default=` hook: objects exposing `to_dict()` and sets."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, frozenset | set):
        return sorted(obj)
    msg = f"{type(obj).__name__} is not JSON serialisable"
    raise TypeError(msg)


class OrjsonResponse(HttpResponse):
    """`HttpResponse` carrying an orjson-encoded body and a JSON content type."""

    def __init__(self, data: Any, *, status: int = 200, **kw: Any) -> None:
        kw.setdefault("content_type", "application/json")
        body = orjson.dumps(data, default=_encode_fallback, option=_ORJSON_OPTIONS)
        super().__init__(content=body, status=status, **kw)


class BaseAsyncView(View):
    """
    Async class-based view with one place for error translation.

    Client errors (`Http404`, `BadRequest`) become `{"detail": ...}`
    envelopes; everything else goes through `handle_exception`, which
    subclasses extend for their own domain errors.
    """

    async def dispatch(self, request: HttpRequest, *args: Any, **kw: Any):  # type: ignore[override]
        self.request = request
        handler = getattr(self, request.method.lower(), None)
        if handler is None:
            return await self.http_method_not_allowed(request, *args, **kw)

        try:
            return await handler(request, *args, **kw)
        except Exception as exc:
            for exc_type, status, fallback in _CLIENT_ERRORS:
                if isinstance(exc, exc_type):
                    log.info("Client error", path=request.path, status=status, err=str(exc))
                    return OrjsonResponse({"detail": str(exc) or fallback}, status=status)
            return self.handle_exception(request, exc)

    def handle_exception(self, request: HttpRequest, exc: Exception) -> HttpResponse:
        log.exception("Unhandled API error", path=request.path, exc_info=exc)
        return OrjsonResponse({"detail": "An internal server error occurred."}, status=500)

    async def http_method_not_allowed(self, request: HttpRequest, *a: Any, **k: Any) -> HttpResponse:
        log.warning("Method Not Allowed", method=request.method, path=request.path)
        return OrjsonResponse({"detail": f'Method "{request.method}" not allowed.'}, status=405)

    async def options(self, request: HttpRequest, *a: Any, **k: Any) -> HttpResponse:
        response = HttpResponse(status=200)
        response["Allow"] = ", ".join(m.upper() for m in self._allowed_methods())
        response["Content-Length"] = "0"
        return response

    # ------------------------------------------------------ query parsing
    @staticmethod
    def get_bool_param(request: HttpRequest, key: str, *, default: bool = False) -> bool:
        raw = request.GET.get(key)
        return default if raw is None else raw.lower() in _TRUTHY

    @staticmethod
    def get_float_param(
        request: HttpRequest,
        key: str,
        /,
        *,
        default: float,
        min_val: float | None = None,
    ) -> float:
        """
        Parse a numeric query parameter.

        Absent or blank means `default`. A value that is present but not a
        finite number at or above `min_val` raises `BadRequest`.
        """
        raw = (request.GET.get(key) or "").strip()
        if not raw:
            return default
        try:
            value = float(raw)
        except ValueError as exc:
            msg = f"'{key}' must be a number."
            raise BadRequest(msg) from exc
        if not math.isfinite(value):
            msg = f"'{key}' must be finite."
            raise BadRequest(msg)
        if min_val is not None and value < min_val:
            msg = f"'{key}' must be >= {min_val:g}."
            raise BadRequest(msg)
        return value


class BaseAppView(BaseAsyncView, ABC):
    """
    GET lifecycle for the API: `_get_params` validates path and query,
    `_produce_payload` builds the body, `get` wraps it in an OrjsonResponse.

    Nothing is cached; each payload reflects the upstream data of the moment.
    """

    @abstractmethod
    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def _produce_payload(self, params: dict[str, Any]) -> Any:
        raise NotImplementedError

    async def get(self, request: HttpRequest, **kwargs) -> OrjsonResponse:
        params = self._get_params(request, **kwargs)
        return OrjsonResponse(await self._produce_payload(params))
