# apps/rewards/serializers.py
# ================================================================================
"""
Read-only serializers for reward payloads.

Plain static methods over frozen dataclasses and pydantic models; there is no
ORM here, so no reflection-based serializer is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from apps.leaderboards.conf import TIER_LABELS
from apps.rewards.conf import (
    DEFAULT_FDV_USD,
    FDV_SLIDER_MAX_USD,
    FDV_SLIDER_STEP_USD,
    PROJECT_CATALOG,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from apps.rewards.conf import ProjectConfig
    from apps.rewards.services.compare import Comparison
    from apps.rewards.services.estimator import Estimate


def _ranked(weights: Mapping[str, float]) -> list[str]:
    """Keys ordered heaviest first, the way the dashboard explains weighting."""
    return [k for k, _ in sorted(weights.items(), key=lambda kv: -kv[1])]


class ProjectSerializer:
    """Serializes ProjectConfig instances."""

    @staticmethod
    def serialize_project(config: ProjectConfig) -> dict[str, Any]:
        return {
            **config.model_dump(mode="json"),
            "included_durations": sorted(config.included_durations),
            "has_rank_fallback": config.has_rank_fallback,
            "time_weight_order": _ranked(config.time_weights),
            "tier_weight_order": [TIER_LABELS.get(t, t) for t in _ranked(config.tier_weights)],
            "fdv": {
                "default": DEFAULT_FDV_USD,
                "min": 0.0,
                "max": FDV_SLIDER_MAX_USD,
                "step": FDV_SLIDER_STEP_USD,
            },
        }

    @staticmethod
    def serialize_catalog(registry: Mapping[str, ProjectConfig]) -> dict[str, Any]:
        """Dashboard project grid plus every scorable config (catalog or file-defined)."""
        listed = {entry.slug for entry in PROJECT_CATALOG}
        catalog = [
            {**entry.model_dump(mode="json"), "scorable": entry.slug in registry}
            for entry in PROJECT_CATALOG
        ]
        catalog += [
            {"name": cfg.name, "slug": slug, "status": "open", "scorable": True}
            for slug, cfg in sorted(registry.items())
            if slug not in listed
        ]
        return {"count": len(catalog), "projects": catalog}


class EstimateSerializer:
    """Serializes estimate and comparison results."""

    @staticmethod
    def serialize_estimate(estimate: Estimate, config: ProjectConfig) -> dict[str, Any]:
        return {
            **estimate.to_dict(),
            "ticker": config.ticker,
            "topic_id": config.topic_id,
        }

    @staticmethod
    def serialize_comparison(comparison: Comparison, config: ProjectConfig) -> dict[str, Any]:
        return {
            **comparison.to_dict(),
            "project": config.slug,
            "ticker": config.ticker,
            "fdv": comparison.you.valuation.fdv,
        }
