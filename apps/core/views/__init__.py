"""
apps.core.views
---------------

Package initialiser.

Makes the shared endpoints directly importable via:

    from apps.core.views import health_check, UpstreamAppView
"""

from __future__ import annotations

from .base import UpstreamAppView
from .custom_handler import json_404_handler, json_500_handler
from .health import health_check

__all__: list[str] = [
    "UpstreamAppView",
    "health_check",
    "json_404_handler",
    "json_500_handler",
]
