"""
Services for the 'rewards' app.

Example:
    from apps.rewards.services import RewardEstimator, score, value_at
"""

from .compare import Comparison, compare
from .estimator import Estimate, RewardEstimator
from .scorer import ScoreResult, Valuation, score, value_at
from .tracker import LatestEstimateTracker

__all__ = [
    "Comparison",
    "Estimate",
    "LatestEstimateTracker",
    "RewardEstimator",
    "ScoreResult",
    "Valuation",
    "compare",
    "score",
    "value_at",
]
