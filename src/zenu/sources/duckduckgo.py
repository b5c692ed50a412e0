"""Search-backed source: DuckDuckGo news results for a category query."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from duckduckgo_search import DDGS
from duckduckgo_search.exceptions import DuckDuckGoSearchException

from zenu.models import RawNewsItem
from zenu.sources.rss_feeds import item_id

logger = logging.getLogger(__name__)

SOURCE_KEY = "duckduckgo"


def published_at(raw_date: str) -> datetime:
    """DDG dates are ISO 8601, sometimes with a Z suffix; unknown means now."""
    if raw_date:
        try:
            parsed = datetime.fromisoformat(raw_date.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable DuckDuckGo date %r", raw_date)
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc)


def to_raw_item(result: dict, index: int) -> RawNewsItem | None:
    title = (result.get("title") or "").strip()
    url = result.get("url") or ""
    if not title or not url:
        return None
    return RawNewsItem(
        id=item_id(SOURCE_KEY, url, index),
        source=SOURCE_KEY,
        title=title,
        content=result.get("body") or "",
        url=url,
        published_at=published_at(result.get("date") or ""),
    )


def fetch_duckduckgo_news(
    query: str,
    max_results: int = 10,
    timelimit: str | None = "w",
) -> list[RawNewsItem]:
    """Search DuckDuckGo news; a failed search yields an empty list."""
    try:
        results = DDGS().news(query, timelimit=timelimit, max_results=max_results)
    except DuckDuckGoSearchException:
        logger.warning("DuckDuckGo search failed for query=%s", query, exc_info=True)
        return []

    items = [item for index, result in enumerate(results) if (item := to_raw_item(result, index))]
    logger.info("DuckDuckGo: %d items for query=%s", len(items), query)
    return items
