# apps/leaderboards/schemas/leaderboard_row.py
# ================================================================================
"""
Defines the LeaderboardRow dataclass, the canonical shape of one upstream
leaderboard entry after case normalization and numeric coercion.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from common.parsers_utils import as_finite_number, as_text


@dataclass(frozen=True, slots=True)
class LeaderboardRow:
    """
    A Data Transfer Object (DTO) for a single leaderboard entry.

    `duration` is upper-cased and `tier` lower-cased so that lookups into the
    per-project weight tables are exact. `mindshare` and `rank` are `None`
    whenever upstream sent something that is not a finite number.
    """

    topic_id: str
    duration: str
    tier: str
    mindshare: float | None = None
    rank: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Returns a dictionary representation of the entire dataclass."""
        return asdict(self)

    @property
    def is_ranked(self) -> bool:
        return self.rank is not None

    @staticmethod
    def parse(src: dict[str, Any]) -> LeaderboardRow | None:
        """
        Safely parse a raw upstream dictionary.

        Returns None only when `src` is not a mapping at all; missing or
        garbled fields are kept as empty values so they score zero later.
        """
        if not isinstance(src, dict):
            return None

        return LeaderboardRow(
            topic_id=as_text(src.get("topic_id")).upper(),
            duration=as_text(src.get("duration")).upper(),
            tier=as_text(src.get("tier")).lower(),
            mindshare=as_finite_number(src.get("mindshare")),
            rank=as_finite_number(src.get("rank")),
        )
