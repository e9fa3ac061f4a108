"""Designer News API connector (client-injected for tests/interception)."""

from __future__ import annotations

from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from designernews.models.domain import Story, User
from designernews.settings import Settings, get_settings
from designernews.utils.logging import get_logger

from .base import FormatError, TransientError, raise_for_status

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = get_logger(__name__)


async def _log_request(request: httpx.Request) -> None:
    logger.debug("dn.http.request", extra={"method": request.method, "url": str(request.url)})


def _unwrap(data: Any, root: str, model: Type[ModelT]) -> List[ModelT]:
    """Decode a wrapped root such as `{"stories": [...]}` into models."""
    if not isinstance(data, dict) or root not in data:
        raise FormatError(f"Designer News payload is missing '{root}'")
    try:
        return TypeAdapter(List[model]).validate_python(data[root] or [])  # type: ignore[valid-type]
    except ValidationError as exc:
        raise FormatError(f"Designer News '{root}' payload is invalid") from exc


class DesignerNewsApi:
    """Async client for the two Designer News endpoints the service needs.

    - with an injected client: the caller owns it (auth, hooks, transport)
    - without one: a client is built from settings and closed by `aclose()`
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, *, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._base_url = self._settings.designer_news_endpoint
        self._client = client or httpx.AsyncClient(
            headers={
                "Accept": "application/json",
                "User-Agent": self._settings.designer_news_user_agent,
            },
            timeout=float(self._settings.designer_news_timeout_seconds),
            event_hooks={"request": [_log_request]},
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DesignerNewsApi":
        return cls(settings=settings)

    async def __aenter__(self) -> "DesignerNewsApi":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        try:
            resp = await self._client.get(self._base_url + path, params=params)
        except httpx.TimeoutException as exc:
            raise TransientError("Designer News request timed out") from exc
        except httpx.HTTPError as exc:
            raise TransientError("Designer News request failed") from exc

        raise_for_status(resp.status_code, "Designer News")
        try:
            return resp.json()
        except ValueError as exc:
            raise FormatError("Designer News returned invalid JSON") from exc

    async def get_top_stories(self, page: int) -> List[Story]:
        data = await self._get_json("stories", params={"page": page})
        return _unwrap(data, "stories", Story)

    async def get_users(self, ids: str) -> List[User]:
        # commas separate ids; anything else is escaped into the path segment
        data = await self._get_json(f"users/{quote(ids, safe=',')}")
        return _unwrap(data, "users", User)
