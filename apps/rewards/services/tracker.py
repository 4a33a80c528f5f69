"""
Latest-request-wins state holder for interactive estimate lookups.

Only the most recently submitted handle may move the state forward. Submitting
a new handle cancels the in-flight lookup, and a result that arrives for a
superseded request is dropped.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from apps.rewards.services.estimator import Estimate

log = structlog.get_logger(__name__).bind(component="EstimateTracker")


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    handle: str


@dataclass(frozen=True, slots=True)
class Loaded:
    handle: str
    estimate: Estimate


@dataclass(frozen=True, slots=True)
class Failed:
    handle: str
    reason: str


type EstimateState = Idle | Loading | Loaded | Failed


class LatestEstimateTracker:
    """
    Wraps an `handle -> Estimate` producer with supersede-and-cancel semantics.

    >>> tracker = LatestEstimateTracker(estimator_for_fdv)   # doctest: +SKIP
    >>> await tracker.submit("alice")                        # doctest: +SKIP
    Loaded(handle='alice', ...)
    """

    def __init__(self, producer: Callable[[str], Awaitable[Estimate]]) -> None:
        self._producer = producer
        self._state: EstimateState = Idle()
        self._settled: EstimateState = self._state
        self._task: asyncio.Task[Estimate] | None = None
        self._generation = itertools.count(1)
        self._current = 0

    @property
    def state(self) -> EstimateState:
        return self._state

    async def submit(self, handle: str) -> EstimateState:
        """
        Start a lookup for `handle`, superseding any earlier one.

        Returns the tracker state once this lookup settles, or the state as
        left by a newer submission if this one was superseded meanwhile.
        """
        self._cancel_inflight()
        generation = next(self._generation)
        self._current = generation
        self._state = Loading(handle)

        task = asyncio.ensure_future(self._producer(handle))
        self._task = task
        try:
            estimate = await task
        except asyncio.CancelledError:
            me = asyncio.current_task()
            if generation != self._current and not (me and me.cancelling()):
                log.debug("superseded lookup dropped", handle=handle)
                return self._state
            if generation == self._current:
                self._task = None
                self._state = self._settled
            raise
        except Exception as exc:
            if generation == self._current:
                self._settle(Failed(handle, str(exc) or type(exc).__name__))
                log.warning("lookup failed", handle=handle, err=str(exc))
            return self._state

        if generation == self._current:
            self._settle(Loaded(handle, estimate))
        else:
            log.debug("stale result discarded", handle=handle)
        return self._state

    def cancel(self) -> None:
        """Abort the in-flight lookup and fall back to the last settled state."""
        if self._cancel_inflight():
            self._current = next(self._generation)
            self._state = self._settled

    # ------------------------------------------------------------- helpers
    def _settle(self, state: EstimateState) -> None:
        self._state = state
        self._settled = state
        self._task = None

    def _cancel_inflight(self) -> bool:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self._task = None
            return True
        return False
