"""Link handling for click-through URLs."""

from __future__ import annotations

import webbrowser
from typing import Protocol
from urllib.parse import urlparse

from designernews.utils.logging import get_logger

logger = get_logger(__name__)


class LinkHandler(Protocol):
    def open_link(self, url: str) -> bool: ...  # noqa: D401


class BrowserLinkHandler:
    """Opens http(s) links in the system browser."""

    def __init__(self, *, new_tab: bool = True) -> None:
        self._new = 2 if new_tab else 0

    def open_link(self, url: str) -> bool:
        if urlparse(url).scheme not in ("http", "https"):
            logger.info("link.rejected", extra={"url": url})
            return False
        return bool(webbrowser.open(url, new=self._new))
