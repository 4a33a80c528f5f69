"""Head-to-head comparison of two estimates priced at the same FDV."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from apps.rewards.services.estimator import Estimate


@dataclass(frozen=True, slots=True)
class Comparison:
    you: Estimate
    fren: Estimate
    leader: str
    you_share_pct: float
    fren_share_pct: float

    @property
    def worth_diff_usd(self) -> float:
        return self.you.worth_usd - self.fren.worth_usd

    def to_dict(self) -> dict[str, Any]:
        return {
            "you": self.you.to_dict(),
            "fren": self.fren.to_dict(),
            "leader": self.leader,
            "you_share_pct": self.you_share_pct,
            "fren_share_pct": self.fren_share_pct,
            "worth_diff_usd": self.worth_diff_usd,
        }


def compare(you: Estimate, fren: Estimate) -> Comparison:
    """
    The fren leads only with a strictly greater worth; a tie goes to `you`.

    The share split mirrors the dashboard's head-to-head bar: negative worths
    count as zero and an all-zero pair renders as 0 / 100.
    """
    leader = fren.handle if fren.worth_usd > you.worth_usd else you.handle

    a = max(0.0, you.worth_usd)
    b = max(0.0, fren.worth_usd)
    total = (a + b) or 1.0
    you_pct = a / total * 100
    return Comparison(
        you=you,
        fren=fren,
        leader=leader,
        you_share_pct=you_pct,
        fren_share_pct=100 - you_pct,
    )
