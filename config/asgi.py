"""
ASGI entry point: Django mounted under a Starlette router.

Starlette serves `/health` and applies CORS to every response; everything
else falls through to Django. Startup fails fast when the reward project
registry cannot be loaded.
"""

from __future__ import annotations

import os
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from django.conf import settings
from django.core.asgi import get_asgi_application
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Mount, Route

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.local")
django_app = get_asgi_application()

# Needs the app registry populated by get_asgi_application().
from apps.core.views import health_check
from apps.rewards.conf import get_project_registry

logger = structlog.get_logger(__name__)


class WarmupError(Exception):
    """The application cannot serve requests with its current configuration."""


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    started = time.monotonic()
    try:
        registry = get_project_registry()
    except Exception as e:
        logger.error("Project registry failed to load. Aborting startup.", error=str(e), exc_info=True)
        msg = f"Project registry failed to load: {e}"
        raise WarmupError(msg) from e

    logger.info(
        "🚀 Rewards API ready",
        projects=sorted(registry),
        upstream=settings.UPSTREAM_API_CONFIG.BASE_URL,
        duration_s=f"{time.monotonic() - started:.2f}",
    )
    yield
    logger.info("Rewards API stopped")


application = Starlette(
    debug=settings.DEBUG,
    routes=[
        Route("/health", endpoint=health_check, methods=["GET", "HEAD"]),
        Mount("/", app=django_app),
    ],
    middleware=[
        Middleware(
            CORSMiddleware,
            allow_origins=getattr(settings, "CORS_ALLOWED_ORIGINS", ["*"]),
            allow_methods=["*"],
            allow_headers=["*"],
        ),
    ],
    lifespan=lifespan,
)
