import math

import pytest

from apps.leaderboards.schemas.leaderboard_row import LeaderboardRow
from apps.rewards.conf import EligibilityRule, get_project
from apps.rewards.services.scorer import EMPTY_RESULT, rank_to_unit, score, tagline_for, value_at


def row(duration="3M", tier="tier1", mindshare=None, rank=None, topic="BILLIONS"):
    return LeaderboardRow(topic_id=topic, duration=duration, tier=tier, mindshare=mindshare, rank=rank)


@pytest.fixture
def billions():
    return get_project("billions")


@pytest.fixture
def irys():
    return get_project("irys")


def test_mindshare_row_scores_and_prices(billions):
    result = score([row(mindshare=100, rank=5)], billions)

    assert result.weighted_score == 100
    assert result.used_mindshare is True
    assert result.eligible is True
    assert result.best_rank == 5
    assert result.tokens_awarded == pytest.approx(1e7 * 100 / 450)

    valuation = value_at(result, billions, 1e9)
    assert valuation.token_price == 1.0
    assert valuation.worth_usd == pytest.approx(2_222_222.22, abs=0.01)
    assert valuation.tagline == "Time for a vacation"


def test_rank_fallback_is_dampened(billions):
    result = score([row(duration="30D", tier="tier2", rank=50)], billions)

    assert result.used_mindshare is False
    assert result.rank_score == pytest.approx(0.951 * 0.8 * 0.7)
    assert result.weighted_score == pytest.approx(0.1864, abs=1e-4)
    assert result.eligible is True
    assert result.tokens_awarded > 0


def test_project_without_rank_fallback_scores_zero(irys):
    result = score([row(topic="IRYS", rank=3)], irys)

    assert result.weighted_score == 0
    assert result.eligible is False
    assert result.tokens_awarded == 0


def test_ineligible_handle_gets_no_tokens(billions):
    result = score([row(mindshare=40, rank=1500)], billions)

    assert result.weighted_score == 40
    assert result.eligible is False
    assert result.tokens_awarded == 0


def test_unranked_mindshare_row_is_ineligible_under_best_rank_rule(billions):
    result = score([row(mindshare=40)], billions)

    assert result.best_rank is None
    assert result.eligible is False


@pytest.mark.parametrize(
    ("slug", "rule"),
    [("billions", EligibilityRule.BEST_RANK), ("portaltobtc", EligibilityRule.ANY_RANKED_ROW)],
)
def test_mixed_rank_handle_under_each_eligibility_rule(slug, rule):
    config = get_project(slug)
    assert config.eligibility_rule is rule
    topic = config.topic_id

    ranked = score([row(topic=topic, mindshare=2.0), row(topic=topic, duration="30D", rank=900)], config)
    assert ranked.best_rank == 900
    assert ranked.eligible is True

    out_of_range = score([row(topic=topic, mindshare=2.0, rank=1001)], config)
    assert out_of_range.eligible is False


def test_fractional_best_rank_is_not_truncated(billions):
    assert score([row(mindshare=10, rank=5.7)], billions).best_rank == 5.7
    assert score([row(mindshare=10, rank=5.0)], billions).best_rank == 5


def test_unknown_tier_and_duration_carry_no_weight(billions):
    result = score([row(tier="tier9", mindshare=50, rank=1), row(duration="7D", mindshare=50, rank=1)], billions)

    assert result.mindshare_score == 0
    assert result.weighted_score == 0
    assert result.eligible is False


def test_negative_mindshare_counts_as_zero(billions):
    result = score([row(mindshare=-10, rank=1), row(duration="30D", mindshare=10, rank=2)], billions)

    assert result.mindshare_score == pytest.approx(8.0)


def test_no_rows_is_empty_result(billions):
    assert score([], billions) == EMPTY_RESULT


def test_score_grows_with_mindshare(billions):
    low = score([row(mindshare=10, rank=5)], billions)
    high = score([row(mindshare=11, rank=5)], billions)

    assert high.weighted_score > low.weighted_score
    assert high.tokens_awarded > low.tokens_awarded


def test_worth_is_linear_in_fdv(billions):
    result = score([row(mindshare=3, rank=20)], billions)
    one = value_at(result, billions, 1e9)
    three = value_at(result, billions, 3e9)

    assert three.worth_usd == pytest.approx(3 * one.worth_usd)
    assert value_at(result, billions, 0).worth_usd == 0


@pytest.mark.parametrize("fdv", [-1.0, math.inf, math.nan])
def test_value_at_rejects_bad_fdv(billions, fdv):
    with pytest.raises(ValueError):
        value_at(EMPTY_RESULT, billions, fdv)


@pytest.mark.parametrize(
    ("worth", "tagline"),
    [
        (150_000, "Time for a vacation"),
        (99_999.99, "I cooked very hard"),
        (1_000, "4 figures, who dis?"),
        (100.5, "I printed a good bag"),
        (99.99, "We go again"),
        (0, "We go again"),
    ],
)
def test_tagline_thresholds(worth, tagline):
    assert tagline_for(worth) == tagline


@pytest.mark.parametrize(
    ("rank", "expected"),
    [(1, 1.0), (1000, 0.001), (1001, 0.0), (0, 0.0), (None, 0.0)],
)
def test_rank_to_unit(rank, expected):
    assert rank_to_unit(rank, 1000) == pytest.approx(expected)
