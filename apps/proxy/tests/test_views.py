import httpx
import orjson
from django.urls import reverse


def kaito_url(path):
    return reverse("proxy:kaito", kwargs={"path": path})


def yap_url(path):
    return reverse("proxy:yap", kwargs={"path": path})


async def test_kaito_get_is_relayed_with_query(async_client, upstream):
    upstream.add(
        "/kaito/user_status",
        httpx.Response(200, json={"data": {"follower_count": 3}}, headers={"x-upstream": "1", "connection": "close"}),
    )

    response = await async_client.get(
        kaito_url("user_status"), {"username": "alice"}, headers={"authorization": "Bearer secret"}
    )

    assert response.status_code == 200
    assert orjson.loads(response.content) == {"data": {"follower_count": 3}}
    assert response["x-upstream"] == "1"
    assert not response.has_header("connection")
    assert response["Access-Control-Allow-Origin"] == "*"

    [sent] = upstream.requests
    assert str(sent.url) == "https://upstream.test/api/kaito/user_status?username=alice"
    assert sent.method == "GET"
    assert sent.content == b""
    assert sent.headers["content-type"] == "application/json"
    assert "authorization" not in sent.headers


async def test_yap_post_forwards_body_and_authorization(async_client, upstream):
    upstream.add("/yap/v1/track", lambda request: httpx.Response(201, content=request.content))

    response = await async_client.post(
        yap_url("v1/track"),
        data=b'{"a": 1}',
        content_type="application/json",
        headers={"authorization": "Bearer token", "x-private": "no"},
    )

    assert response.status_code == 201
    assert response.content == b'{"a": 1}'
    [sent] = upstream.requests
    assert sent.method == "POST"
    assert sent.headers["authorization"] == "Bearer token"
    assert "x-private" not in sent.headers


async def test_upstream_status_is_mirrored(async_client, upstream):
    response = await async_client.get(kaito_url("does/not/exist"))

    assert response.status_code == 404


async def test_options_short_circuits(async_client, upstream):
    response = await async_client.options(yap_url("anything"))

    assert response.status_code == 204
    assert response["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
    assert upstream.requests == []


async def test_kaito_failure_is_500(async_client, upstream):
    upstream.add("/kaito/user_status", httpx.ConnectError("refused"))

    response = await async_client.get(kaito_url("user_status"))

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Proxy error"
    assert "refused" in body["detail"]


async def test_yap_failure_is_502(async_client, upstream):
    upstream.add("/yap/open-ish", httpx.ReadTimeout("too slow"))

    response = await async_client.get(yap_url("open-ish"))

    assert response.status_code == 502
    assert response.json()["error"] == "Upstream proxy failed"


async def test_yap_open_requires_username(async_client, upstream):
    response = await async_client.get(reverse("proxy:yap-open"))

    assert response.status_code == 400
    assert response.json() == {"error": "Username is required"}
    assert upstream.requests == []


async def test_yap_open_relays_json(async_client, upstream):
    upstream.add("/yap/open", json={"data": {"yaps_all": 7}})

    response = await async_client.get(reverse("proxy:yap-open"), {"username": "alice"})

    assert response.status_code == 200
    assert response.json() == {"data": {"yaps_all": 7}}
    assert response["Access-Control-Allow-Origin"] == "*"


async def test_yap_open_keeps_upstream_error_status(async_client, upstream):
    upstream.add("/yap/open", httpx.Response(404, json={"error": "unknown user"}))

    response = await async_client.get(reverse("proxy:yap-open"), {"username": "ghost"})

    assert response.status_code == 404
    assert response.json() == {"error": "unknown user"}


async def test_yap_open_non_json_is_500(async_client, upstream):
    upstream.add("/yap/open", httpx.Response(200, text="<html>"))

    response = await async_client.get(reverse("proxy:yap-open"), {"username": "alice"})

    assert response.status_code == 500
    assert response.json()["error"] == "Proxy error"
