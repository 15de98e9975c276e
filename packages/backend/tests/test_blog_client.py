"""Blog client tests — every failure mode becomes a FetchFailure.

Learn: httpx.MockTransport stands in for the WordPress site, so these
tests exercise the real request/response handling without a network.
"""

import httpx
import pytest

from blogwords.errors import FetchError
from blogwords.fetcher.blog_client import BlogClient, FetchFailure, FetchSuccess

URL = "https://blog.test/wp-json/wp/v2/posts"

POSTS = [
    {"id": 1, "title": {"rendered": "The cat"}, "content": {"rendered": "<p>sat</p>"}},
    {"id": 2, "title": {"rendered": "The cat"}, "content": {"rendered": "<p>ran</p>"}},
]


def _client(handler) -> BlogClient:
    return BlogClient(URL, per_page=5, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_documents_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json=POSTS)

    async with _client(handler) as blog:
        result = await blog.fetch_documents()

    assert isinstance(result, FetchSuccess)
    assert result.ok
    assert [d.id for d in result.documents] == [1, 2]
    assert result.documents[0].title == "The cat"
    assert result.documents[1].body.strip() == "ran"
    assert seen["url"] == f"{URL}?per_page=5"


@pytest.mark.asyncio
async def test_fetch_documents_empty_list_is_success():
    async with _client(lambda req: httpx.Response(200, json=[])) as blog:
        result = await blog.fetch_documents()
    assert isinstance(result, FetchSuccess)
    assert result.documents == ()


@pytest.mark.asyncio
async def test_http_error_status_is_failure():
    async with _client(lambda req: httpx.Response(503, text="down")) as blog:
        result = await blog.fetch_documents()
    assert isinstance(result, FetchFailure)
    assert not result.ok
    assert result.documents == ()
    assert "503" in str(result.error)


@pytest.mark.asyncio
async def test_transport_error_is_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as blog:
        result = await blog.fetch_documents()
    assert isinstance(result, FetchFailure)
    assert isinstance(result.error, FetchError)
    assert isinstance(result.error.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_invalid_json_is_failure():
    async with _client(lambda req: httpx.Response(200, text="<html>oops</html>")) as blog:
        result = await blog.fetch_documents()
    assert isinstance(result, FetchFailure)
    assert "invalid JSON" in str(result.error)


@pytest.mark.asyncio
async def test_non_list_payload_is_failure():
    payload = {"code": "rest_no_route", "message": "No route"}
    async with _client(lambda req: httpx.Response(200, json=payload)) as blog:
        result = await blog.fetch_documents()
    assert isinstance(result, FetchFailure)
    assert "list of posts" in str(result.error)


@pytest.mark.asyncio
async def test_non_object_post_is_failure():
    async with _client(lambda req: httpx.Response(200, json=[POSTS[0], "junk"])) as blog:
        result = await blog.fetch_documents()
    assert isinstance(result, FetchFailure)
    assert "post #1" in str(result.error)
