"""Designer News page service: fetch a page of stories and resolve authors."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Union

from designernews.connectors.base import DesignerNewsClient, FormatError, to_comma_joined
from designernews.connectors.designer_news import DesignerNewsApi
from designernews.links import BrowserLinkHandler, LinkHandler
from designernews.models.domain import (
    SCORE_GLYPH,
    CatchUpItem,
    DataRequest,
    DataResult,
    ServiceMeta,
    Story,
    User,
    to_web_url,
)
from designernews.settings import Settings
from designernews.utils.logging import get_logger

SERVICE_KEY = "dn"

SERVICE_META = ServiceMeta(
    id=SERVICE_KEY,
    name="Designer News",
    pages_are_numeric=True,
    first_page_key="0",
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

logger = get_logger(__name__)


def parse_long(value: str) -> int:
    """Parse a signed 64-bit integer, rejecting anything else."""
    if not _INTEGER.fullmatch(value):
        raise FormatError(f"Not an integer: {value!r}")
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise FormatError(f"Integer out of 64-bit range: {value!r}")
    return number


def _parse_page(page_id: str) -> int:
    page = parse_long(page_id)
    if page < 0:
        raise FormatError(f"Page id must be non-negative: {page_id!r}")
    return page


def _unique_author_ids(stories: List[Story]) -> List[str]:
    seen: set[str] = set()
    ids: List[str] = []
    for story in stories:
        user_id = story.links.user
        if not user_id or user_id in seen:
            continue
        seen.add(user_id)
        ids.append(user_id)
    return ids


def to_item(story: Story, author: Optional[User]) -> CatchUpItem:
    return CatchUpItem(
        id=parse_long(story.id),
        title=story.title,
        score=(SCORE_GLYPH, story.vote_count),
        timestamp=story.created_at,
        author=author.display_name if author is not None else None,
        source=story.hostname,
        comment_count=story.comment_count,
        tag=story.badge,
        item_click_url=story.url,
        item_comment_click_url=to_web_url(story.href),
    )


class DesignerNewsService:
    """Text service backed by the Designer News API."""

    def __init__(
        self,
        api: DesignerNewsClient,
        link_handler: LinkHandler,
        service_meta: ServiceMeta = SERVICE_META,
        *,
        owns_api: bool = False,
    ) -> None:
        self._api = api
        self._link_handler = link_handler
        self._meta = service_meta
        self._owns_api = owns_api

    async def __aenter__(self) -> "DesignerNewsService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self._api, "aclose", None)
        if self._owns_api and close is not None:
            await close()

    def meta(self) -> ServiceMeta:
        return self._meta

    def link_handler(self) -> LinkHandler:
        return self._link_handler

    async def _resolve_authors(self, stories: List[Story]) -> Dict[str, User]:
        # The users endpoint is best effort: ids may be missing from the response
        ids = _unique_author_ids(stories)
        if not ids:
            return {}
        try:
            users = await self._api.get_users(to_comma_joined(ids))
        except Exception as exc:
            logger.warning(
                "dn.users.fallback",
                extra={"ids": len(ids), "error": type(exc).__name__},
            )
            return {}
        return {user.id: user for user in users}

    async def fetch_page(self, request: Union[DataRequest, str]) -> DataResult:
        page_id = request.page_id if isinstance(request, DataRequest) else request
        page = _parse_page(page_id)

        stories = await self._api.get_top_stories(page)
        authors = await self._resolve_authors(stories)
        items = [to_item(story, authors.get(story.links.user or "")) for story in stories]
        logger.info(
            "dn.page.fetched",
            extra={"page": page, "stories": len(stories), "authors": len(authors)},
        )
        return DataResult(items=items, next_page=str(page + 1))


def create_service(
    settings: Optional[Settings] = None,
    *,
    client: Optional[DesignerNewsClient] = None,
    link_handler: Optional[LinkHandler] = None,
) -> DesignerNewsService:
    """Assemble a DesignerNewsService from explicit collaborators.

    A client built here is owned by the service and closed by `aclose()`.
    """
    return DesignerNewsService(
        api=client or DesignerNewsApi.from_settings(settings),
        link_handler=link_handler or BrowserLinkHandler(),
        owns_api=client is None,
    )
