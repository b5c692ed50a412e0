"""Google News RSS search source."""

from __future__ import annotations

import logging
from urllib.parse import quote_plus

from zenu.models import RawNewsItem
from zenu.sources.rss_feeds import fetch_rss_feed

logger = logging.getLogger(__name__)

_GOOGLE_NEWS_RSS = "https://news.google.com/rss/search?q={query}&hl={lang}&gl={country}&ceid={country}:{lang}"


def fetch_google_news(
    query: str,
    lang: str = "en",
    country: str = "NG",
    timeout: float = 10.0,
) -> list[RawNewsItem]:
    """Fetch recent news from Google News RSS for a search query."""
    url = _GOOGLE_NEWS_RSS.format(query=quote_plus(query), lang=lang, country=country)
    items = fetch_rss_feed(url, "google_news", timeout=timeout)
    logger.info("Google News: %d items for query=%s", len(items), query)
    return items
