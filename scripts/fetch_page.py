"""Quick Designer News smoke test.

Usage:
  python scripts/fetch_page.py -p 0 -n 5 [--summarize]

Reads configuration from .env via pydantic settings. `--summarize` requires
SMMRY_API_KEY and summarizes the first printed story.
Prints the fetched count, the next page token and a few items.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List

from designernews.connectors.base import ConnectorError
from designernews.connectors.smmry import SmmryClient, SmmryRequest
from designernews.links import BrowserLinkHandler
from designernews.service import create_service
from designernews.settings import get_settings
from designernews.utils.logging import configure_logging


async def _run(page: str, top: int, summarize: bool) -> int:
    cfg = get_settings()
    async with create_service(cfg, link_handler=BrowserLinkHandler()) as service:
        result = await service.fetch_page(page)

    print(f"Fetched: {len(result.items)} next_page={result.next_page}")
    shown = result.items[: max(0, top)]
    for i, item in enumerate(shown, 1):
        glyph, votes = item.score
        print(f"{i:02d}. {glyph}{votes} {item.title} by {item.author or '-'}")
        print(f"    {item.item_comment_click_url}")

    if summarize and shown and shown[0].item_click_url:
        async with SmmryClient(settings=cfg) as smmry:
            summary = await smmry.summarize_url(SmmryRequest(url=shown[0].item_click_url))
        print(f"\n{summary.title}\n{', '.join(summary.display_keywords)}\n\n{summary.summary_text}")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Designer News smoke test")
    parser.add_argument("-p", "--page", default="0", help="Page id (default: 0)")
    parser.add_argument("-n", "--top", type=int, default=5, help="Print top N items (default: 5)")
    parser.add_argument("--summarize", action="store_true", help="Summarize the first story via SMMRY")
    args = parser.parse_args(argv)

    cfg = get_settings()
    configure_logging(cfg.log_level, cfg.log_json)
    print(
        "Config:",
        {
            "endpoint": cfg.designer_news_endpoint,
            "timeout_s": int(cfg.designer_news_timeout_seconds),
            "smmry": bool(cfg.smmry_api_key),
        },
    )

    try:
        return asyncio.run(_run(args.page, args.top, args.summarize))
    except ConnectorError as exc:
        print(f"Failed to load page: {exc}")
        return 2


if __name__ == "__main__":  # pragma: no cover - manual tool
    sys.exit(main())
