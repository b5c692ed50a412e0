"""RSS feed source."""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from html import unescape
from re import sub as re_sub

import feedparser
import httpx

from zenu.models import RawNewsItem

logger = logging.getLogger(__name__)

_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def strip_html(text: str) -> str:
    """Remove HTML tags and unescape entities."""
    clean = re_sub(r"<[^>]+>", "", text)
    return unescape(clean).strip()


def item_id(source: str, url: str, index: int) -> str:
    """Stable id for a fetched item: source plus a short digest of its URL."""
    key = url or f"{source}:{index}"
    return f"{source}-{hashlib.sha256(key.encode()).hexdigest()[:12]}"


def parse_published(entry: dict) -> datetime | None:
    """Parse the published or updated date from a feedparser entry."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime(*parsed[:6], tzinfo=timezone.utc)
            except (TypeError, ValueError):
                continue
    return None


def entry_content(entry: dict) -> str:
    for key in ("summary", "description", "content"):
        value = entry.get(key)
        if isinstance(value, list):
            value = value[0].get("value", "") if value else ""
        if value:
            return strip_html(value)
    return ""


def fetch_rss_feed(feed_url: str, source: str, timeout: float = 10.0) -> list[RawNewsItem]:
    """Download and parse one RSS feed. Returns [] on any failure."""
    try:
        with httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": _USER_AGENT},
        ) as client:
            response = client.get(feed_url)
            response.raise_for_status()
            content = response.text
    except httpx.HTTPError:
        logger.warning("Failed to fetch RSS feed for %s: %s", source, feed_url, exc_info=True)
        return []

    feed = feedparser.parse(content)
    if feed.bozo and not feed.entries:
        logger.warning("RSS parse error for %s: %s", source, feed.bozo_exception)
        return []

    items = []
    for index, entry in enumerate(feed.entries):
        link = entry.get("link", "")
        items.append(
            RawNewsItem(
                id=item_id(source, link, index),
                source=source,
                title=strip_html(entry.get("title", "")) or "Untitled",
                content=entry_content(entry),
                url=link,
                published_at=parse_published(entry) or datetime.now(timezone.utc),
            )
        )

    logger.info("RSS %s: %d items", source, len(items))
    return items
