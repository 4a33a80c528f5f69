# apps/rewards/conf.py
# ================================================================================
"""Configuration, constants, and Pydantic models for the 'rewards' app."""

from __future__ import annotations

import functools
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from apps.leaderboards.conf import CANONICAL_DURATIONS

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

log = structlog.get_logger(__name__).bind(component="RewardsConf")

# ─── Valuation Defaults ────────────────────────────────────────────────────────
# FDV is a simulation input. The slider bounds are advisory product choices.
DEFAULT_FDV_USD: Final[float] = 1_000_000_000.0
FDV_SLIDER_MAX_USD: Final[float] = 5_000_000_000.0
FDV_SLIDER_STEP_USD: Final[float] = 1_000_000.0

DEFAULT_RANK_CEILING: Final[int] = 1000

# Share-card copy, checked top-down against floor(worth_usd).
TAGLINES: Final[tuple[tuple[int, str], ...]] = (
    (100_000, "Time for a vacation"),
    (10_000, "I cooked very hard"),
    (1_000, "4 figures, who dis?"),
    (100, "I printed a good bag"),
)
FALLBACK_TAGLINE: Final[str] = "We go again"

# ─── Management Command Defaults ──────────────────────────────────────────────
ESTIMATE_CMD_DEFAULT_FDV: Final[float] = DEFAULT_FDV_USD


class EligibilityRule(StrEnum):
    """How a project decides that a handle is on its leaderboard at all."""

    BEST_RANK = "best_rank"  # best finite rank across rows is within the ceiling
    ANY_RANKED_ROW = "any_ranked_row"  # at least one row is ranked within the ceiling


class ProjectStatus(StrEnum):
    OPEN = "open"
    CLOSE = "close"


# ─── Pydantic Configuration & Validation Models ────────────────────────────────


class ProjectConfig(BaseModel):
    """
    The constant table behind one project's reward estimate.

    Immutable once loaded. Weight-table keys are canonicalised the same way
    leaderboard rows are (durations upper-case, tiers lower-case) so lookups
    are exact.
    """

    slug: str = Field(min_length=1, pattern=r"^[a-z0-9_-]+$")
    name: str
    ticker: str
    topic_id: str = Field(min_length=1)
    time_weights: dict[str, float]
    tier_weights: dict[str, float]
    included_durations: frozenset[str] = Field(default=frozenset(CANONICAL_DURATIONS))
    total_supply: float = Field(gt=0)
    reward_pool: float = Field(ge=0)
    global_mindshare_denominator: float = Field(ge=0)
    rank_fallback_penalty: float | None = Field(
        default=None,
        gt=0,
        lt=1,
        description="Dampens the rank-derived score; None disables the rank fallback.",
    )
    eligibility_rank_ceiling: int = Field(default=DEFAULT_RANK_CEILING, ge=1)
    eligibility_rule: EligibilityRule = EligibilityRule.BEST_RANK

    model_config = ConfigDict(frozen=True)

    @field_validator("topic_id")
    @classmethod
    def _upper_topic(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("included_durations")
    @classmethod
    def _upper_durations(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(d.strip().upper() for d in v)

    @field_validator("time_weights")
    @classmethod
    def _check_time_weights(cls, v: dict[str, float]) -> dict[str, float]:
        return _validated_weights(v, str.upper)

    @field_validator("tier_weights")
    @classmethod
    def _check_tier_weights(cls, v: dict[str, float]) -> dict[str, float]:
        return _validated_weights(v, str.lower)

    @property
    def has_rank_fallback(self) -> bool:
        return self.rank_fallback_penalty is not None


def _validated_weights(weights: dict[str, float], canon: Callable[[str], str]) -> dict[str, float]:
    out: dict[str, float] = {}
    for key, weight in weights.items():
        if not 0 < weight <= 1:
            msg = f"weight for {key!r} must be in (0, 1], got {weight}"
            raise ValueError(msg)
        canonical = canon(key.strip())
        if canonical in out:
            msg = f"duplicate weight key {key!r} (same as {canonical!r})"
            raise ValueError(msg)
        out[canonical] = weight
    return out


_STANDARD_TIME_WEIGHTS: Final[dict[str, float]] = {"3M": 1.0, "30D": 0.8, "6M": 0.5}

BUILTIN_PROJECTS: Final[tuple[ProjectConfig, ...]] = (
    ProjectConfig(
        slug="irys",
        name="Irys",
        ticker="IRYS",
        topic_id="IRYS",
        time_weights=_STANDARD_TIME_WEIGHTS,
        # Specific > Community > Creator
        tier_weights={"specific": 1.0, "tier2": 0.7, "tier1": 0.5},
        total_supply=1_000_000_000,
        reward_pool=7_500_000,
        global_mindshare_denominator=355,
    ),
    ProjectConfig(
        slug="billions",
        name="Billions",
        ticker="BLNS",
        topic_id="BILLIONS",
        time_weights=_STANDARD_TIME_WEIGHTS,
        tier_weights={"tier1": 1.0, "tier2": 0.7},
        total_supply=1_000_000_000,
        reward_pool=10_000_000,
        global_mindshare_denominator=450,
        rank_fallback_penalty=0.35,
    ),
    ProjectConfig(
        slug="portaltobtc",
        name="Portal to BTC",
        ticker="PTB",
        topic_id="PORTALPORTAL",
        time_weights=_STANDARD_TIME_WEIGHTS,
        tier_weights={"tier1": 1.0, "tier2": 0.7},
        total_supply=8_390_000_000,
        reward_pool=41_950_000,  # 0.5% of supply
        global_mindshare_denominator=400,
        rank_fallback_penalty=0.35,
        eligibility_rule=EligibilityRule.ANY_RANKED_ROW,
    ),
)


class CatalogEntry(BaseModel):
    """One tile of the user dashboard's project grid."""

    name: str
    slug: str
    status: ProjectStatus

    model_config = ConfigDict(frozen=True)


PROJECT_CATALOG: Final[tuple[CatalogEntry, ...]] = tuple(
    CatalogEntry(name=name, slug=slug, status=status)
    for name, slug, status in (
        ("Irys", "irys", ProjectStatus.OPEN),
        ("Union", "union", ProjectStatus.OPEN),
        ("Monad", "monad", ProjectStatus.OPEN),
        ("Billions", "billions", ProjectStatus.OPEN),
        ("Boundless", "boundless", ProjectStatus.OPEN),
        ("Portal to BTC", "portaltobtc", ProjectStatus.OPEN),
        ("Cysic", "cysic", ProjectStatus.OPEN),
        ("Abstract", "abstract", ProjectStatus.CLOSE),
        ("Lombard", "lombard", ProjectStatus.CLOSE),
        ("Anoma", "anoma", ProjectStatus.CLOSE),
        ("0g Labs", "0glabs", ProjectStatus.CLOSE),
        ("Allora", "allora", ProjectStatus.CLOSE),
        ("MegaETH", "megaeth", ProjectStatus.CLOSE),
        ("Katana", "katana", ProjectStatus.CLOSE),
    )
)

_PROJECT_LIST_ADAPTER: Final = TypeAdapter(list[ProjectConfig])


# ─── Registry ─────────────────────────────────────────────────────────────────


def load_project_file(path: str | Path) -> list[ProjectConfig]:
    """Parse a JSON list of ProjectConfig objects; any defect is a config error."""
    try:
        raw = orjson.loads(Path(path).read_bytes())
        return _PROJECT_LIST_ADAPTER.validate_python(raw)
    except (OSError, orjson.JSONDecodeError, ValidationError) as exc:
        msg = f"Invalid REWARD_PROJECTS_FILE {path}: {exc}"
        raise ImproperlyConfigured(msg) from exc


def build_registry(extra: list[ProjectConfig] | None = None) -> Mapping[str, ProjectConfig]:
    """Built-in projects overlaid with `extra`; a duplicate slug replaces the built-in."""
    projects = {p.slug: p for p in BUILTIN_PROJECTS}
    for p in extra or ():
        if p.slug in projects:
            log.info("project config overridden", slug=p.slug)
        projects[p.slug] = p
    return MappingProxyType(projects)


@functools.cache
def get_project_registry() -> Mapping[str, ProjectConfig]:
    path = getattr(settings, "REWARD_PROJECTS_FILE", None)
    extra = load_project_file(path) if path else None
    registry = build_registry(extra)
    log.debug("project registry built", projects=sorted(registry))
    return registry


def get_project(slug: str) -> ProjectConfig | None:
    return get_project_registry().get(slug.lower())
