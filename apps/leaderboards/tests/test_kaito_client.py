import httpx
import pytest

from apps.core.services.upstream_client import UpstreamError
from apps.leaderboards.services.kaito_client import KaitoClient, YapClient


async def test_leaderboard_search_sends_username(upstream):
    upstream.add_rows({"alice": [{"topic_id": "IRYS", "duration": "3M"}]})

    async with KaitoClient() as client:
        rows = await client.leaderboard_search("alice")

    assert rows == [{"topic_id": "IRYS", "duration": "3M"}]
    [request] = upstream.requests
    assert str(request.url) == "https://upstream.test/api/kaito/leaderboard-search?username=alice"


async def test_user_status_and_yaps_unwrap_data(upstream):
    upstream.add("/kaito/user_status", json={"data": {"follower_count": 10}})
    upstream.add("/yap/open", json={"data": {"yaps_all": 3.5}})

    async with KaitoClient() as kaito, YapClient() as yap:
        assert await kaito.user_status("bob") == {"follower_count": 10}
        assert await yap.open("bob") == {"yaps_all": 3.5}


async def test_missing_data_object_is_empty(upstream):
    upstream.add("/kaito/user_status", json={"data": None})

    async with KaitoClient() as kaito:
        assert await kaito.user_status("bob") == {}


@pytest.mark.parametrize(
    "route",
    [
        httpx.Response(503, json={"detail": "down"}),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.ConnectError("connection refused"),
    ],
)
async def test_upstream_failures_raise_upstream_error(upstream, route):
    upstream.add("/kaito/leaderboard-search", route)

    async with KaitoClient() as client:
        with pytest.raises(UpstreamError):
            await client.leaderboard_search("alice")

    assert len(upstream.requests) == 1  # no retries


def test_client_requires_context_manager():
    client = KaitoClient()
    with pytest.raises(RuntimeError):
        client.session  # noqa: B018
