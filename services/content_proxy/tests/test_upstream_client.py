import json
from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import Response

from services.content_proxy.core.exceptions import (
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamUnreachableError,
)
from services.content_proxy.services.upstream_cache import UpstreamResponseCache
from services.content_proxy.services.upstream_client import UpstreamClient

BASE = "https://upstream.test/api"


@pytest_asyncio.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


class TestBuildUrl:
    def test_joins_base_and_path(self):
        upstream = UpstreamClient(MagicMock(), BASE + "/")
        assert upstream.build_url("/blogs") == f"{BASE}/blogs"

    def test_adds_leading_slash(self):
        upstream = UpstreamClient(MagicMock(), BASE)
        assert upstream.build_url("courses") == f"{BASE}/courses"

    def test_appends_query_verbatim(self):
        upstream = UpstreamClient(MagicMock(), BASE)
        assert upstream.build_url("/blogs", query_string="page=2&sort=-date") == f"{BASE}/blogs?page=2&sort=-date"

    def test_quotes_path_params(self):
        upstream = UpstreamClient(MagicMock(), BASE)
        url = upstream.build_url(
            "/darul-ifta/sub-category/{subCategoryId}", {"subCategoryId": "a b/c"}
        )
        assert url == f"{BASE}/darul-ifta/sub-category/a%20b%2Fc"


@pytest.mark.asyncio
async def test_fetch_json_returns_payload(respx_mock, http_client):
    respx_mock.get(f"{BASE}/blogs").mock(return_value=Response(200, json=[{"id": 1}]))
    upstream = UpstreamClient(http_client, BASE)

    assert await upstream.fetch_json(f"{BASE}/blogs") == [{"id": 1}]


@pytest.mark.asyncio
async def test_fetch_json_forwards_post_body(respx_mock, http_client):
    route = respx_mock.post(f"{BASE}/forms").mock(return_value=Response(201, json={"ok": True}))
    upstream = UpstreamClient(http_client, BASE)

    await upstream.fetch_json(f"{BASE}/forms", method="POST", body={"name": "X"})

    assert json.loads(route.calls.last.request.content) == {"name": "X"}


@pytest.mark.asyncio
async def test_status_error(respx_mock, http_client):
    respx_mock.get(f"{BASE}/blogs").mock(return_value=Response(503, text="down for maintenance"))
    upstream = UpstreamClient(http_client, BASE)

    with pytest.raises(UpstreamStatusError) as exc_info:
        await upstream.fetch_json(f"{BASE}/blogs")

    assert exc_info.value.status_code == 503
    assert exc_info.value.body_snippet == "down for maintenance"
    assert exc_info.value.public_message == "API responded with status: 503"


@pytest.mark.asyncio
async def test_transport_error(respx_mock, http_client):
    respx_mock.get(f"{BASE}/blogs").mock(side_effect=httpx.ConnectTimeout)
    upstream = UpstreamClient(http_client, BASE)

    with pytest.raises(UpstreamUnreachableError) as exc_info:
        await upstream.fetch_json(f"{BASE}/blogs")

    assert isinstance(exc_info.value.cause, httpx.ConnectTimeout)


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "<html></html>"])
async def test_decode_error(respx_mock, http_client, text):
    respx_mock.get(f"{BASE}/blogs").mock(return_value=Response(200, text=text))
    upstream = UpstreamClient(http_client, BASE)

    with pytest.raises(UpstreamDecodeError):
        await upstream.fetch_json(f"{BASE}/blogs")


@pytest.mark.asyncio
async def test_cached_get_hits_upstream_once(respx_mock, http_client):
    route = respx_mock.get(f"{BASE}/courses").mock(return_value=Response(200, json=[1]))
    upstream = UpstreamClient(http_client, BASE, cache=UpstreamResponseCache())

    await upstream.fetch_json(f"{BASE}/courses", cache_seconds=60)
    assert await upstream.fetch_json(f"{BASE}/courses", cache_seconds=60) == [1]

    assert route.call_count == 1


@pytest.mark.asyncio
async def test_zero_cache_window_always_fetches(respx_mock, http_client):
    route = respx_mock.get(f"{BASE}/courses").mock(return_value=Response(200, json=[1]))
    upstream = UpstreamClient(http_client, BASE, cache=UpstreamResponseCache())

    await upstream.fetch_json(f"{BASE}/courses")
    await upstream.fetch_json(f"{BASE}/courses")

    assert route.call_count == 2
