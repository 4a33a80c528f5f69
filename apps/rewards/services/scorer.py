# apps/rewards/services/scorer.py
# ==============================================================================
"""
Reward scorer: normalized leaderboard rows + a ProjectConfig ➜ ScoreResult.

One engine for every project; all project differences live in the
ProjectConfig constant table.

Policy
------
* Mindshare is the authoritative signal. When any row carries a mindshare
  number and the weighted sum is positive, that sum is the score.
* Otherwise the rank-derived score is used, multiplied by the project's
  `rank_fallback_penalty` so it can never out-score a genuine mindshare
  result. Projects without a penalty have no rank fallback and score 0.
* Tokens are only ever awarded to eligible handles.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from apps.rewards.conf import FALLBACK_TAGLINE, TAGLINES, EligibilityRule

if TYPE_CHECKING:
    from collections.abc import Sequence

    from apps.leaderboards.schemas.leaderboard_row import LeaderboardRow
    from apps.rewards.conf import ProjectConfig


@dataclass(frozen=True, slots=True)
class ScoreResult:
    weighted_score: float
    used_mindshare: bool
    eligible: bool
    best_rank: int | float | None
    tokens_awarded: float
    mindshare_score: float = 0.0
    rank_score: float = 0.0
    row_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Valuation:
    fdv: float
    token_price: float
    worth_usd: float
    tagline: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


EMPTY_RESULT = ScoreResult(
    weighted_score=0.0,
    used_mindshare=False,
    eligible=False,
    best_rank=None,
    tokens_awarded=0.0,
)


def rank_to_unit(rank: float | None, ceiling: int) -> float:
    """
    Linear decay from 1.0 at rank 1 to 1/ceiling at the ceiling; 0 outside.

    >>> rank_to_unit(1, 1000)
    1.0
    >>> rank_to_unit(1001, 1000)
    0.0
    """
    if rank is None or rank <= 0 or rank > ceiling:
        return 0.0
    return (ceiling + 1 - rank) / ceiling


def _reported_rank(best_rank: float) -> int | float | None:
    # Whole ranks print as ints; fractional upstream ranks pass through.
    if not math.isfinite(best_rank):
        return None
    return int(best_rank) if float(best_rank).is_integer() else best_rank


def _is_eligible(rows: Sequence[LeaderboardRow], best_rank: float, final: float, config: ProjectConfig) -> bool:
    if final <= 0:
        return False
    ceiling = config.eligibility_rank_ceiling
    if config.eligibility_rule is EligibilityRule.ANY_RANKED_ROW:
        return any(row.is_ranked and row.rank <= ceiling for row in rows)
    return math.isfinite(best_rank) and best_rank <= ceiling


def allocate_tokens(final_score: float, eligible: bool, config: ProjectConfig) -> float:
    if not eligible or config.global_mindshare_denominator <= 0:
        return 0.0
    return max(0.0, config.reward_pool * final_score / config.global_mindshare_denominator)


def score(rows: Sequence[LeaderboardRow], config: ProjectConfig) -> ScoreResult:
    """Score one handle's rows for one project. Pure; never raises on bad rows."""
    if not rows:
        return EMPTY_RESULT

    ceiling = config.eligibility_rank_ceiling
    mindshare_score = 0.0
    rank_score = 0.0
    saw_mindshare = False
    best_rank = math.inf

    for row in rows:
        time_weight = config.time_weights.get(row.duration, 0.0)
        tier_weight = config.tier_weights.get(row.tier, 0.0)
        weight = time_weight * tier_weight

        if row.mindshare is not None:
            saw_mindshare = True
            mindshare_score += max(0.0, row.mindshare) * weight

        rank_score += rank_to_unit(row.rank, ceiling) * weight
        if row.rank is not None and row.rank < best_rank:
            best_rank = row.rank

    if saw_mindshare and mindshare_score > 0:
        final, used_mindshare = mindshare_score, True
    elif config.rank_fallback_penalty is not None:
        final, used_mindshare = rank_score * config.rank_fallback_penalty, False
    else:
        final, used_mindshare = 0.0, False

    eligible = _is_eligible(rows, best_rank, final, config)
    return ScoreResult(
        weighted_score=final,
        used_mindshare=used_mindshare,
        eligible=eligible,
        best_rank=_reported_rank(best_rank),
        tokens_awarded=allocate_tokens(final, eligible, config),
        mindshare_score=mindshare_score,
        rank_score=rank_score,
        row_count=len(rows),
    )


def tagline_for(worth_usd: float) -> str:
    worth = math.floor(worth_usd)
    for threshold, line in TAGLINES:
        if worth >= threshold:
            return line
    return FALLBACK_TAGLINE


def value_at(result: ScoreResult, config: ProjectConfig, fdv: float) -> Valuation:
    """Price the allocation at a simulated fully-diluted valuation."""
    if not math.isfinite(fdv) or fdv < 0:
        msg = f"fdv must be a finite, non-negative number, got {fdv}"
        raise ValueError(msg)
    token_price = fdv / config.total_supply
    worth = result.tokens_awarded * token_price
    return Valuation(fdv=fdv, token_price=token_price, worth_usd=worth, tagline=tagline_for(worth))
