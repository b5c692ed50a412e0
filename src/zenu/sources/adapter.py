"""News source adapter: per-source fetch with RSS, scrape and synthetic fallback."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Protocol

from zenu.config import Settings
from zenu.models import RawNewsItem
from zenu.sources.duckduckgo import fetch_duckduckgo_news
from zenu.sources.google_news import fetch_google_news
from zenu.sources.rss_feeds import fetch_rss_feed
from zenu.sources.scraper import scrape_homepage
from zenu.sources.synthetic import generate_synthetic_news

logger = logging.getLogger(__name__)

_SYNTHETIC_PER_SOURCE = 5
_DEFAULT_QUERY = "Nigeria news"


@dataclass(frozen=True)
class NewsSource:
    name: str
    rss: str | None = None
    scrape: str | None = None
    search: str | None = None


NEWS_SOURCES: dict[str, NewsSource] = {
    "vanguard": NewsSource(
        name="Vanguard Nigeria",
        rss="https://www.vanguardngr.com/feed/",
        scrape="https://www.vanguardngr.com",
    ),
    "punch": NewsSource(
        name="The Punch",
        rss="https://punchng.com/feed/",
        scrape="https://punchng.com",
    ),
    "arise": NewsSource(name="Arise News", scrape="https://www.arise.tv/news/"),
    "local": NewsSource(name="Local Community Reports"),
    "google_news": NewsSource(name="Google News", search="google_news"),
    "duckduckgo": NewsSource(name="DuckDuckGo News", search="duckduckgo"),
}

CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "politics": ["president", "government", "election", "senate", "policy", "minister"],
    "sports": ["football", "eagles", "match", "tournament", "player", "coach"],
    "entertainment": ["nollywood", "music", "celebrity", "movie", "artist", "award"],
    "business": ["economy", "market", "business", "trade", "investment", "startup"],
    "technology": ["tech", "digital", "internet", "software", "innovation", "ai"],
    "health": ["health", "hospital", "doctor", "medical", "disease", "treatment"],
}


class NewsSourceAdapter(Protocol):
    def fetch_batch(
        self, sources: list[str], categories: list[str], limit: int
    ) -> list[RawNewsItem]: ...


def filter_by_category(items: list[RawNewsItem], categories: list[str]) -> list[RawNewsItem]:
    """Keep items whose title or content mentions a keyword of any category."""
    if not categories:
        return items

    keywords = [
        keyword
        for category in categories
        for keyword in CATEGORY_KEYWORDS.get(category.lower(), [])
    ]
    return [
        item
        for item in items
        if any(keyword in f"{item.title} {item.content}".lower() for keyword in keywords)
    ]


class DefaultNewsAdapter:
    def __init__(self, settings: Settings, rng: random.Random | None = None) -> None:
        self._timeout = settings.news_timeout_seconds
        self._rng = rng or random.Random()

    def fetch_source(self, key: str, categories: list[str]) -> list[RawNewsItem]:
        """Fetch one registered source, trying RSS, then scraping, then synthetic."""
        config = NEWS_SOURCES[key]
        items: list[RawNewsItem] = []

        if config.search:
            for query in categories or [_DEFAULT_QUERY]:
                if config.search == "google_news":
                    items.extend(fetch_google_news(query, timeout=self._timeout))
                else:
                    items.extend(fetch_duckduckgo_news(query))

        if not items and config.rss:
            items = fetch_rss_feed(config.rss, key, timeout=self._timeout)

        if not items and config.scrape:
            items = scrape_homepage(config.scrape, key, timeout=self._timeout)

        if not items:
            logger.warning("Using synthetic news for %s", key)
            items = generate_synthetic_news(key, _SYNTHETIC_PER_SOURCE, rng=self._rng)

        return items

    def fetch_batch(
        self, sources: list[str], categories: list[str], limit: int
    ) -> list[RawNewsItem]:
        all_items: list[RawNewsItem] = []
        seen_urls: set[str] = set()

        for key in sources:
            if key not in NEWS_SOURCES:
                logger.warning("Unknown news source: %s", key)
                continue
            for item in self.fetch_source(key, categories):
                if item.url and item.url in seen_urls:
                    continue
                seen_urls.add(item.url)
                all_items.append(item)

        filtered = filter_by_category(all_items, categories)
        if categories and not filtered:
            logger.warning(
                "No items matched categories %s, keeping unfiltered batch", categories
            )
            filtered = all_items

        self._rng.shuffle(filtered)
        return filtered[:limit]
