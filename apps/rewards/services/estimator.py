"""
Reward estimation service: handle ➜ upstream rows ➜ normalized rows ➜ score ➜
valuation.

Each call is request-scoped and shares nothing with other calls except the
optional HTTP session passed in by the caller.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from apps.core.services import upstream_client
from apps.leaderboards.services.kaito_client import KaitoClient
from apps.leaderboards.services.normalizer import normalize_rows
from apps.rewards.services.compare import Comparison, compare
from apps.rewards.services.scorer import ScoreResult, Valuation, score, value_at

if TYPE_CHECKING:
    from collections.abc import Callable

    from apps.core.services.protocols import LeaderboardSourceProtocol
    from apps.rewards.conf import ProjectConfig

log = structlog.get_logger(__name__).bind(comp="RewardEstimator")


@dataclass(frozen=True, slots=True)
class Estimate:
    handle: str
    project: str
    result: ScoreResult
    valuation: Valuation

    @property
    def worth_usd(self) -> float:
        return self.valuation.worth_usd

    def to_dict(self) -> dict[str, Any]:
        return {
            "handle": self.handle,
            "project": self.project,
            **self.result.to_dict(),
            **self.valuation.to_dict(),
        }


class RewardEstimator:
    """
    Orchestrates one project's estimate for one or two handles.

    `source_factory` builds a leaderboard source bound to an HTTP session; the
    default is the live `KaitoClient`.
    """

    def __init__(
        self,
        config: ProjectConfig,
        *,
        source_factory: Callable[[httpx.AsyncClient | None], LeaderboardSourceProtocol] | None = None,
    ) -> None:
        self.config = config
        self._source_factory = source_factory or (lambda session: KaitoClient(session=session))

    async def estimate(self, handle: str, fdv: float, *, session: httpx.AsyncClient | None = None) -> Estimate:
        start_time = time.perf_counter()
        async with self._source_factory(session) as source:
            raw_rows = await source.leaderboard_search(handle)

        rows = normalize_rows(raw_rows, self.config)
        result = score(rows, self.config)
        valuation = value_at(result, self.config, fdv)

        log.info(
            "Estimate computed",
            project=self.config.slug,
            handle=handle,
            rows=len(rows),
            eligible=result.eligible,
            used_mindshare=result.used_mindshare,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        return Estimate(handle=handle, project=self.config.slug, result=result, valuation=valuation)

    async def compare(self, you: str, fren: str, fdv: float) -> Comparison:
        """
        Estimate both handles concurrently under the same config and FDV.

        If either leg fails the sibling is cancelled and the first failure is
        re-raised, so callers never see a one-sided comparison.
        """
        async with upstream_client.new_session() as session:
            try:
                async with asyncio.TaskGroup() as tg:
                    you_task = tg.create_task(self.estimate(you, fdv, session=session))
                    fren_task = tg.create_task(self.estimate(fren, fdv, session=session))
            except ExceptionGroup as eg:
                raise eg.exceptions[0] from eg

        return compare(you_task.result(), fren_task.result())
