"""Forwarding rules for the upstream pass-through endpoints."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from apps.leaderboards.conf import KAITO_NAMESPACE, YAP_NAMESPACE

ALL_METHODS: Final[str] = "GET,POST,PUT,PATCH,DELETE,OPTIONS"


class ForwardRule(BaseModel):
    """How one upstream namespace is relayed."""

    namespace: str
    request_headers: tuple[str, ...] = Field(description="Request headers copied to upstream, lower-case.")
    default_request_headers: dict[str, str] = Field(default_factory=dict)
    error_status: int
    error_message: str
    allow_methods: str = ALL_METHODS
    allow_headers: str = "Content-Type"

    model_config = ConfigDict(frozen=True)


KAITO_RULE: Final[ForwardRule] = ForwardRule(
    namespace=KAITO_NAMESPACE,
    request_headers=("content-type",),
    default_request_headers={"content-type": "application/json"},
    error_status=500,
    error_message="Proxy error",
)

YAP_RULE: Final[ForwardRule] = ForwardRule(
    namespace=YAP_NAMESPACE,
    request_headers=("content-type", "authorization"),
    error_status=502,
    error_message="Upstream proxy failed",
    allow_headers="Content-Type, Authorization",
)

# /api/yap/open is read-only and answers its own preflight.
YAP_OPEN_RULE: Final[ForwardRule] = ForwardRule(
    namespace=YAP_NAMESPACE,
    request_headers=(),
    error_status=500,
    error_message="Proxy error",
    allow_methods="GET,HEAD,OPTIONS",
    allow_headers="content-type",
)

PROXY_RULES: Final[dict[str, ForwardRule]] = {
    KAITO_RULE.namespace: KAITO_RULE,
    YAP_RULE.namespace: YAP_RULE,
}

USERNAME_REQUIRED: Final[str] = "Username is required"
