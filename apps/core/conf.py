"""Constants shared by every app that talks to the upstream leaderboard API."""

from __future__ import annotations

from typing import Final

DEFAULT_TIMEOUT_S: Final[float] = 30.0

USER_AGENT: Final[str] = "yapium-rewards/0.1"

# Response headers that describe the upstream connection, not the payload.
HOP_BY_HOP_HEADERS: Final[frozenset[str]] = frozenset(
    {"content-encoding", "transfer-encoding", "connection"},
)

# `error` value of the 502 envelope returned when an upstream lookup fails.
UPSTREAM_ERROR_CODE: Final[str] = "upstream_error"
