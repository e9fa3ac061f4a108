"""Domain models for Designer News payloads and display items."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

SCORE_GLYPH = "▲"


class StoryLinks(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    user: Optional[str] = Field(None, description="Author user id")
    comments: List[str] = Field(default_factory=list)
    upvotes: List[str] = Field(default_factory=list)


class Story(BaseModel):
    """A story as returned by the `stories` endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(..., description="Numeric-valued string id")
    title: str
    vote_count: int = 0
    created_at: AwareDatetime
    comment_count: int = 0
    badge: Optional[str] = None
    hostname: Optional[str] = None
    url: Optional[str] = None
    href: str = Field(..., description="API URL of the story")
    links: StoryLinks = Field(default_factory=StoryLinks)


class User(BaseModel):
    """A user as returned by the `users/{ids}` endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    display_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    job: Optional[str] = None
    portrait_url: Optional[str] = None


class CatchUpItem(BaseModel):
    """Normalized display item built from a story and its resolved author."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    score: Tuple[str, int]
    timestamp: datetime
    author: Optional[str] = None
    source: Optional[str] = None
    comment_count: int = 0
    tag: Optional[str] = None
    item_click_url: Optional[str] = None
    item_comment_click_url: Optional[str] = None


class DataRequest(BaseModel):
    page_id: str
    from_refresh: bool = False


class DataResult(BaseModel):
    items: List[CatchUpItem] = Field(default_factory=list)
    next_page: str


class ServiceMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    pages_are_numeric: bool = False
    first_page_key: str = "0"


def to_web_url(href: str) -> str:
    """Rewrite an API story URL into its public web URL."""
    return href.replace("api.", "www.").replace("api/v2/", "")
