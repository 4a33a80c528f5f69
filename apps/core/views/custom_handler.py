# apps/core/views/custom_handler.py
"""JSON replacements for Django's HTML 404/500 pages."""

import structlog
from asgiref.sync import async_to_sync

from common.views_utils import OrjsonResponse

log = structlog.get_logger(__name__).bind(component="ErrorHandlers")


async def _not_found(request):
    return OrjsonResponse({"detail": "No API endpoint at this path.", "path": request.path}, status=404)


async def _server_error(request):
    log.error("Unhandled server error", path=request.path, method=request.method)
    return OrjsonResponse({"detail": "An internal server error occurred."}, status=500)


# Django's URL checks inspect handler signatures, so these stay plain functions.
def json_404_handler(request, exception):
    return async_to_sync(_not_found)(request)


def json_500_handler(request):
    return async_to_sync(_server_error)(request)
