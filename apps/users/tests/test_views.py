import httpx
from django.urls import reverse


async def test_user_summary(async_client, upstream):
    upstream.add("/kaito/user_status", json={"data": {"follower_count": 1200, "smart_follower_count": 35}})
    upstream.add("/yap/open", json={"data": {"yaps_all": 812.5, "yaps_l24h": None}})

    response = await async_client.get(reverse("users:summary", kwargs={"handle": "@alice"}))

    assert response.status_code == 200
    data = response.json()
    assert data["handle"] == "alice"
    assert data["follower_count"] == 1200
    assert data["smart_follower_count"] == 35
    assert data["yaps_all"] == 812.5
    assert data["yaps_l24h"] == 0
    assert data["count"] == len(data["projects"])
    assert {r.url.params["username"] for r in upstream.requests} == {"alice"}


async def test_missing_data_defaults_to_zero(async_client, upstream):
    upstream.add("/kaito/user_status", json={})
    upstream.add("/yap/open", json={"data": {}})

    data = (await async_client.get(reverse("users:summary", kwargs={"handle": "bob"}))).json()

    assert (data["follower_count"], data["smart_follower_count"], data["yaps_all"], data["yaps_l24h"]) == (0, 0, 0, 0)


async def test_either_fetch_failing_is_502(async_client, upstream):
    upstream.add("/kaito/user_status", json={"data": {"follower_count": 1}})
    upstream.add("/yap/open", httpx.ConnectError("refused"))

    response = await async_client.get(reverse("users:summary", kwargs={"handle": "bob"}))

    assert response.status_code == 502
    assert response.json()["error"] == "upstream_error"
