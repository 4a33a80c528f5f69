"""
Leaderboard normalizer: raw upstream rows ➜ the rows one project scores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from apps.leaderboards.schemas.leaderboard_row import LeaderboardRow

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apps.rewards.conf import ProjectConfig

log = structlog.get_logger(__name__).bind(component="LeaderboardNormalizer")


def extract_rows(payload: Any) -> list[dict[str, Any]]:
    """Pull the row list out of a `{"data": [...]}` envelope; anything else is empty."""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    return data if isinstance(data, list) else []


def normalize_rows(rows: Iterable[Any], config: ProjectConfig) -> list[LeaderboardRow]:
    """
    Keep the rows for `config.topic_id` whose duration is one of the project's
    included windows.

    Topic matching is case-insensitive. Rows that pass the filter are kept
    even when tier, mindshare or rank are unusable: they contribute zero
    weight at scoring time instead of vanishing here.
    """
    topic = config.topic_id.upper()
    included = config.included_durations

    kept: list[LeaderboardRow] = []
    skipped = 0
    for raw in rows:
        row = LeaderboardRow.parse(raw)
        if row is None:
            skipped += 1
            continue
        if row.topic_id == topic and row.duration in included:
            kept.append(row)

    if skipped:
        log.debug("non-mapping rows ignored", topic=topic, skipped=skipped)
    return kept
