"""
tests/test_http_client.py
──────────────────────────
``UpstreamClient`` error mapping against a local aiohttp test server.
"""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as AiohttpTestServer

from btc_dashboard.services.base import SchemaError, UpstreamError
from btc_dashboard.services.http import UpstreamClient


async def _json_ok(request):
    return web.json_response({"days": request.query.get("days")})


async def _json_as_text(request):
    return web.Response(text='{"data": [1, 2]}', content_type="text/plain")


async def _block_count(request):
    return web.Response(text="849000")


async def _server_error(request):
    return web.Response(status=500, text="boom")


async def _not_json(request):
    return web.Response(text="<html>oops</html>", content_type="text/html")


async def _slow(request):
    await asyncio.sleep(0.5)
    return web.Response(text="late")


@pytest.fixture
async def server():
    app = web.Application()
    app.router.add_get("/ok", _json_ok)
    app.router.add_get("/text-json", _json_as_text)
    app.router.add_get("/getblockcount", _block_count)
    app.router.add_get("/error", _server_error)
    app.router.add_get("/html", _not_json)
    app.router.add_get("/slow", _slow)

    test_server = AiohttpTestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest.fixture
async def client():
    upstream = UpstreamClient(timeout_seconds=0.2)
    yield upstream
    await upstream.close()


async def test_get_json_passes_params(server, client):
    data = await client.get_json(str(server.make_url("/ok")), params={"days": "7"})
    assert data == {"days": "7"}


async def test_get_json_ignores_content_type(server, client):
    data = await client.get_json(str(server.make_url("/text-json")))
    assert data == {"data": [1, 2]}


async def test_get_text(server, client):
    assert await client.get_text(str(server.make_url("/getblockcount"))) == "849000"


async def test_non_success_status_raises_upstream_error(server, client):
    url = str(server.make_url("/error"))

    with pytest.raises(UpstreamError) as exc_info:
        await client.get_json(url, source="CoinGecko")

    assert exc_info.value.status == 500
    assert exc_info.value.url == url
    assert str(exc_info.value) == "[CoinGecko] API error: 500"


async def test_invalid_json_raises_schema_error(server, client):
    with pytest.raises(SchemaError):
        await client.get_json(str(server.make_url("/html")))


async def test_timeout_raises_upstream_error(server, client):
    with pytest.raises(UpstreamError) as exc_info:
        await client.get_text(str(server.make_url("/slow")))

    assert exc_info.value.status is None


async def test_connection_failure_raises_upstream_error(client):
    with pytest.raises(UpstreamError):
        await client.get_json("http://127.0.0.1:1/unreachable")


async def test_close_is_idempotent(server, client):
    await client.get_text(str(server.make_url("/getblockcount")))
    await client.close()
    await client.close()
