"""Homepage scraping fallback and single-article extraction."""

from __future__ import annotations

import logging
from urllib.parse import urljoin

import httpx
import trafilatura
from bs4 import BeautifulSoup

from zenu.errors import ExternalServiceError
from zenu.models import RawNewsItem
from zenu.sources.rss_feeds import item_id

logger = logging.getLogger(__name__)

_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
_ARTICLE_SELECTOR = "article, .post, .news-item, .article"
_MAX_BLOCKS = 10
_MAX_ARTICLE_CHARS = 4000


def parse_listing(html: str, base_url: str, source: str) -> list[RawNewsItem]:
    """Extract article teasers from a news homepage."""
    soup = BeautifulSoup(html, "html.parser")
    items = []
    for index, block in enumerate(soup.select(_ARTICLE_SELECTOR)[:_MAX_BLOCKS]):
        heading = block.select_one("h1, h2, h3, .title, .headline")
        title = heading.get_text(strip=True) if heading else ""
        if not title:
            continue
        teaser = block.select_one("p, .excerpt, .summary")
        content = teaser.get_text(strip=True) if teaser else ""
        anchor = block.find("a", href=True)
        link = urljoin(base_url, anchor["href"]) if anchor else base_url
        items.append(
            RawNewsItem(
                id=item_id(source, link, index),
                source=source,
                title=title,
                content=content or title,
                url=link,
            )
        )
    return items


def scrape_homepage(url: str, source: str, timeout: float = 10.0) -> list[RawNewsItem]:
    """Scrape article teasers from ``url``. Returns [] on any failure."""
    try:
        with httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": _USER_AGENT},
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPError:
        logger.warning("Scrape failed for %s: %s", source, url, exc_info=True)
        return []

    items = parse_listing(response.text, url, source)
    logger.info("Scraped %s: %d items", source, len(items))
    return items


def fetch_article(url: str, source: str = "manual") -> RawNewsItem:
    """Download one article and extract its main text.

    Raises ExternalServiceError when the page cannot be fetched or has no
    extractable text.
    """
    downloaded = trafilatura.fetch_url(url)
    if downloaded is None:
        raise ExternalServiceError(f"Failed to fetch article: {url}")

    text = trafilatura.extract(downloaded)
    if not text:
        raise ExternalServiceError(f"No article text found at {url}")

    metadata = trafilatura.extract_metadata(downloaded)
    title = metadata.title if metadata is not None and metadata.title else "Untitled Article"
    return RawNewsItem(
        id=item_id(source, url, 0),
        source=source,
        title=title,
        content=text[:_MAX_ARTICLE_CHARS],
        url=url,
    )
