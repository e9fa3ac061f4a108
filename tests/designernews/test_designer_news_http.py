from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx
import pytest

pytest.importorskip("pytest_httpx")

from designernews.connectors.base import FormatError, PermanentError, TransientError
from designernews.connectors.designer_news import DesignerNewsApi
from designernews.service import create_service

BASE = "https://api.designernews.co/api/v2"


def _story_json(story_id: str, user_id: str) -> dict:
    return {
        "id": story_id,
        "title": f"Story {story_id}",
        "comment": "",
        "vote_count": 5,
        "comment_count": 1,
        "created_at": "2017-06-01T12:30:00.000Z",
        "badge": None,
        "hostname": "example.com",
        "url": f"https://example.com/{story_id}",
        "href": f"{BASE}/stories/{story_id}",
        "links": {"user": user_id, "comments": ["1"], "upvotes": []},
    }


@pytest.mark.asyncio
async def test_get_top_stories_unwraps_and_decodes(httpx_mock):
    httpx_mock.add_response(
        method="GET",
        url=f"{BASE}/stories?page=0",
        json={"stories": [_story_json("42", "7"), {**_story_json("43", "8"), "id": 43}]},
    )

    async with DesignerNewsApi() as api:
        stories = await api.get_top_stories(0)

    assert [s.id for s in stories] == ["42", "43"]
    assert stories[0].links.user == "7"
    assert stories[0].created_at == datetime(2017, 6, 1, 12, 30, tzinfo=timezone.utc)
    assert stories[0].badge is None


@pytest.mark.asyncio
async def test_get_users_joins_ids_in_path(httpx_mock):
    httpx_mock.add_response(
        method="GET",
        url=f"{BASE}/users/7,8",
        json={"users": [{"id": 7, "display_name": "Jane"}, {"id": "8", "display_name": "Sam", "job": "Designer"}]},
    )

    async with DesignerNewsApi() as api:
        users = await api.get_users("7,8")

    assert [(u.id, u.display_name) for u in users] == [("7", "Jane"), ("8", "Sam")]
    assert users[1].job == "Designer"


@pytest.mark.asyncio
@pytest.mark.parametrize("status, error", [(429, TransientError), (503, TransientError), (404, PermanentError)])
async def test_status_codes_map_to_errors(httpx_mock, status, error):
    httpx_mock.add_response(method="GET", url=f"{BASE}/stories?page=1", json={}, status_code=status)

    async with DesignerNewsApi() as api:
        with pytest.raises(error):
            await api.get_top_stories(1)


@pytest.mark.asyncio
async def test_timeout_raises_transient(httpx_mock):
    httpx_mock.add_exception(httpx.ReadTimeout("slow"))

    async with DesignerNewsApi() as api:
        with pytest.raises(TransientError):
            await api.get_top_stories(0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"text": "<html>oops</html>"},
        {"json": [_story_json("1", "7")]},
        {"json": {"stories": [{"id": "1"}]}},
        {"json": {"stories": [{**_story_json("1", "7"), "created_at": "2017-06-01T12:30:00"}]}},
    ],
)
async def test_bad_payloads_raise_format_error(httpx_mock, kwargs):
    httpx_mock.add_response(method="GET", url=f"{BASE}/stories?page=0", **kwargs)

    async with DesignerNewsApi() as api:
        with pytest.raises(FormatError):
            await api.get_top_stories(0)


@pytest.mark.asyncio
async def test_default_client_logs_requests(httpx_mock, caplog):
    httpx_mock.add_response(method="GET", url=f"{BASE}/stories?page=0", json={"stories": []})

    with caplog.at_level(logging.DEBUG, logger="designernews.connectors.designer_news"):
        async with DesignerNewsApi() as api:
            await api.get_top_stories(0)

    records = [r for r in caplog.records if r.getMessage() == "dn.http.request"]
    assert len(records) == 1
    assert records[0].url == f"{BASE}/stories?page=0"


@pytest.mark.asyncio
async def test_injected_client_is_intercepted_and_not_closed(httpx_mock):
    httpx_mock.add_response(method="GET", url=f"{BASE}/stories?page=0", json={"stories": []})
    seen = []

    async def _auth(request: httpx.Request) -> None:
        request.headers["Authorization"] = "Bearer token"
        seen.append(request)

    async with httpx.AsyncClient(event_hooks={"request": [_auth]}) as client:
        async with DesignerNewsApi(client) as api:
            assert await api.get_top_stories(0) == []
        assert not client.is_closed

    assert len(seen) == 1
    assert httpx_mock.get_request().headers["Authorization"] == "Bearer token"


@pytest.mark.asyncio
async def test_service_end_to_end_with_users_outage(httpx_mock):
    httpx_mock.add_response(
        method="GET",
        url=f"{BASE}/stories?page=3",
        json={"stories": [_story_json("1", "7"), _story_json("2", "7")]},
    )
    httpx_mock.add_response(method="GET", url=f"{BASE}/users/7", status_code=500)

    async with DesignerNewsApi() as api:
        result = await create_service(client=api).fetch_page("3")

    assert [item.id for item in result.items] == [1, 2]
    assert [item.author for item in result.items] == [None, None]
    assert result.items[0].item_comment_click_url == "https://www.designernews.co/stories/1"
    assert result.next_page == "4"


@pytest.mark.asyncio
async def test_default_service_closes_its_client():
    async with create_service() as service:
        client = service._api._client
        assert not client.is_closed

    assert client.is_closed


@pytest.mark.asyncio
async def test_get_users_escapes_ids_in_path(httpx_mock):
    httpx_mock.add_response(method="GET", json={"users": []})

    async with DesignerNewsApi() as api:
        assert await api.get_users("7/../x,8?a#b") == []

    request = httpx_mock.get_request()
    assert request.url.raw_path == b"/api/v2/users/7%2F..%2Fx,8%3Fa%23b"
    assert request.url.query == b""
