# apps/rewards/views.py
# ======================================================================
"""Asynchronous API views for the 'rewards' application."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.core.exceptions import BadRequest
from django.http import Http404, HttpRequest

from apps.core.views.base import UpstreamAppView
from apps.rewards import conf
from apps.rewards.serializers import EstimateSerializer, ProjectSerializer
from apps.rewards.services.estimator import RewardEstimator
from common.parsers_utils import clean_handle
from common.views_utils import BaseAppView

if TYPE_CHECKING:
    from apps.rewards.conf import ProjectConfig

log = structlog.get_logger(__name__).bind(component="RewardViews")


def _project_or_404(slug: str) -> ProjectConfig:
    config = conf.get_project(slug)
    if config is None:
        msg = f"Project '{slug}' has no reward model."
        raise Http404(msg)
    return config


def _handle_or_400(raw: str) -> str:
    handle = clean_handle(raw)
    if not handle:
        msg = "A username is required."
        raise BadRequest(msg)
    return handle


# --- /rewards/projects ---
class ProjectListView(BaseAppView):
    """GET /api/v1/rewards/projects – dashboard catalog with scorable flags."""

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        return {"detail": self.get_bool_param(request, "detail")}

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        registry = conf.get_project_registry()
        payload = ProjectSerializer.serialize_catalog(registry)
        if p["detail"]:
            payload["models"] = [ProjectSerializer.serialize_project(cfg) for cfg in registry.values()]
        return payload


# --- /rewards/<slug> ---
class ProjectDetailView(BaseAppView):
    """GET /api/v1/rewards/{slug} – the constant table and weighting order."""

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        return {"config": _project_or_404(kwargs["slug"])}

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        return ProjectSerializer.serialize_project(p["config"])


# --- /rewards/<slug>/<handle> ---
class EstimateView(UpstreamAppView):
    """GET /api/v1/rewards/{slug}/{handle}?fdv= – one handle's estimate."""

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        return {
            "config": _project_or_404(kwargs["slug"]),
            "handle": _handle_or_400(kwargs["handle"]),
            "fdv": self.get_float_param(request, "fdv", default=conf.DEFAULT_FDV_USD, min_val=0.0),
        }

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        config: ProjectConfig = p["config"]
        estimate = await RewardEstimator(config).estimate(p["handle"], p["fdv"])
        return EstimateSerializer.serialize_estimate(estimate, config)


# --- /rewards/<slug>/<handle>/compare/<fren> ---
class CompareView(UpstreamAppView):
    """GET /api/v1/rewards/{slug}/{handle}/compare/{fren}?fdv= – head-to-head."""

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        return {
            "config": _project_or_404(kwargs["slug"]),
            "handle": _handle_or_400(kwargs["handle"]),
            "fren": _handle_or_400(kwargs["fren"]),
            "fdv": self.get_float_param(request, "fdv", default=conf.DEFAULT_FDV_USD, min_val=0.0),
        }

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        config: ProjectConfig = p["config"]
        comparison = await RewardEstimator(config).compare(p["handle"], p["fren"], p["fdv"])
        log.info("Comparison computed", project=config.slug, you=p["handle"], fren=p["fren"], leader=comparison.leader)
        return EstimateSerializer.serialize_comparison(comparison, config)
