import orjson
import pytest
from django.core.exceptions import ImproperlyConfigured
from pydantic import ValidationError

from apps.rewards.conf import (
    BUILTIN_PROJECTS,
    EligibilityRule,
    ProjectConfig,
    build_registry,
    get_project,
    get_project_registry,
    load_project_file,
)

UNION = {
    "slug": "union",
    "name": "Union",
    "ticker": "U",
    "topic_id": "union",
    "time_weights": {"3m": 1.0, "30d": 0.6},
    "tier_weights": {"TIER1": 1.0},
    "total_supply": 10_000_000_000,
    "reward_pool": 50_000_000,
    "global_mindshare_denominator": 500,
    "rank_fallback_penalty": 0.25,
}


def test_builtin_projects():
    assert {p.slug for p in BUILTIN_PROJECTS} == {"irys", "billions", "portaltobtc"}
    assert get_project("IRYS").has_rank_fallback is False
    assert get_project("irys").eligibility_rule is EligibilityRule.BEST_RANK
    assert get_project("billions").eligibility_rule is EligibilityRule.BEST_RANK
    assert get_project("portaltobtc").eligibility_rule is EligibilityRule.ANY_RANKED_ROW
    assert get_project("billions").rank_fallback_penalty == 0.35
    assert get_project("portaltobtc").topic_id == "PORTALPORTAL"
    assert get_project("union") is None


def test_weight_keys_are_canonicalised():
    config = ProjectConfig(**UNION)

    assert config.topic_id == "UNION"
    assert config.time_weights == {"3M": 1.0, "30D": 0.6}
    assert config.tier_weights == {"tier1": 1.0}
    assert config.included_durations == frozenset({"3M", "30D", "6M"})


@pytest.mark.parametrize(
    "override",
    [
        {"time_weights": {"3M": 0}},
        {"tier_weights": {"tier1": 1.5}},
        {"total_supply": 0},
        {"rank_fallback_penalty": 1.0},
        {"slug": "Has Spaces"},
        {"time_weights": {"3m": 1.0, "3M": 0.5}},
        {"tier_weights": {"Tier1": 1.0, " tier1": 0.7}},
    ],
)
def test_invalid_configs_are_rejected(override):
    with pytest.raises(ValidationError):
        ProjectConfig(**{**UNION, **override})


def test_config_is_frozen():
    config = ProjectConfig(**UNION)
    with pytest.raises(ValidationError):
        config.reward_pool = 1


def test_file_projects_overlay_builtins(tmp_path):
    path = tmp_path / "projects.json"
    path.write_bytes(orjson.dumps([UNION, {**UNION, "slug": "billions", "name": "Billions v2"}]))

    registry = build_registry(load_project_file(path))

    assert registry["union"].reward_pool == 50_000_000
    assert registry["billions"].name == "Billions v2"
    assert "irys" in registry


@pytest.mark.parametrize("content", [b"{not json", b'[{"slug": "x"}]', b'{"slug": "x"}'])
def test_bad_project_file_is_improperly_configured(tmp_path, content):
    path = tmp_path / "projects.json"
    path.write_bytes(content)

    with pytest.raises(ImproperlyConfigured):
        load_project_file(path)


def test_missing_project_file_is_improperly_configured(tmp_path):
    with pytest.raises(ImproperlyConfigured):
        load_project_file(tmp_path / "absent.json")


def test_registry_reads_settings_file(settings, tmp_path):
    path = tmp_path / "projects.json"
    path.write_bytes(orjson.dumps([UNION]))
    settings.REWARD_PROJECTS_FILE = str(path)
    get_project_registry.cache_clear()

    assert get_project("union").ticker == "U"
