# apps/core/services/protocols.py
"""
Defines the structural contracts (Protocols) for upstream data sources.

Using protocols lets the reward estimator accept anything with the right
"shape": the real HTTP client in production, an in-memory fake in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Self

if TYPE_CHECKING:
    from types import TracebackType


class LeaderboardSourceProtocol(Protocol):
    """
    Contract for anything that can return raw leaderboard rows for a handle.

    Implementations are async context managers so that HTTP sessions are
    opened and closed around a single request scope.
    """

    async def __aenter__(self) -> Self:
        """Enters the asynchronous context, for setting up resources like HTTP sessions."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exits the context, for cleaning up resources."""
        ...

    async def leaderboard_search(self, username: str) -> list[dict[str, Any]]:
        """Return every raw leaderboard row the upstream knows for `username`."""
        ...
