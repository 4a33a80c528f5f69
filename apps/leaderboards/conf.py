# apps/leaderboards/conf.py
# ================================================================================
"""Configuration and constants for the 'leaderboards' app."""

from __future__ import annotations

from typing import Final

# ─── Upstream namespaces & endpoints ───────────────────────────────────────────
# Paths are relative to settings.UPSTREAM_API_CONFIG.BASE_URL.
KAITO_NAMESPACE: Final[str] = "kaito"
YAP_NAMESPACE: Final[str] = "yap"

LEADERBOARD_SEARCH_PATH: Final[str] = "leaderboard-search"
USER_STATUS_PATH: Final[str] = "user_status"
YAPS_OPEN_PATH: Final[str] = "open"

# ─── Canonical row vocabulary ──────────────────────────────────────────────────
CANONICAL_DURATIONS: Final[tuple[str, ...]] = ("3M", "30D", "6M")

# Human labels used by the dashboard copy.
TIER_LABELS: Final[dict[str, str]] = {
    "tier1": "Creator",
    "tier2": "Community",
    "specific": "Specific",
}
