"""Tests for homepage scraping and article extraction."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from zenu.errors import ExternalServiceError
from zenu.sources.scraper import fetch_article, parse_listing, scrape_homepage

LISTING_HTML = """
<html><body>
  <article>
    <h2><a href="/2026/02/eagles-win">Eagles Win Friendly</a></h2>
    <p>Nigeria beat Ghana 2-1 in Lagos.</p>
  </article>
  <div class="post">
    <h3 class="title">Naira Gains</h3>
    <a href="https://other.example/naira">Read more</a>
  </div>
  <div class="news-item"><p>No heading here</p></div>
</body></html>
"""


def test_parse_listing_extracts_teasers():
    items = parse_listing(LISTING_HTML, "https://www.vanguardngr.com", "vanguard")

    assert [i.title for i in items] == ["Eagles Win Friendly", "Naira Gains"]
    assert items[0].url == "https://www.vanguardngr.com/2026/02/eagles-win"
    assert items[0].content == "Nigeria beat Ghana 2-1 in Lagos."
    assert items[1].url == "https://other.example/naira"
    assert items[1].content == "Naira Gains"
    assert all(i.source == "vanguard" for i in items)


def test_parse_listing_caps_blocks():
    html = "".join(f"<article><h2>Story {i}</h2></article>" for i in range(25))
    assert len(parse_listing(html, "https://x.example", "arise")) == 10


def test_scrape_homepage_fetches_and_parses():
    with patch("zenu.sources.scraper.httpx.Client") as mock_http:
        mock_http.return_value.__enter__.return_value.get.return_value.text = LISTING_HTML
        items = scrape_homepage("https://punchng.com", "punch")

    assert len(items) == 2
    assert items[0].source == "punch"


def test_scrape_homepage_http_failure():
    with patch("zenu.sources.scraper.httpx.Client") as mock_http:
        mock_http.return_value.__enter__.return_value.get.side_effect = httpx.ReadTimeout("slow")
        assert scrape_homepage("https://punchng.com", "punch") == []


def test_fetch_article_extracts_text():
    with patch("zenu.sources.scraper.trafilatura") as mock_traf:
        mock_traf.fetch_url.return_value = "<html>...</html>"
        mock_traf.extract.return_value = "Full article text."
        mock_traf.extract_metadata.return_value = MagicMock(title="Big Story")
        item = fetch_article("https://example.com/story")

    assert item.title == "Big Story"
    assert item.content == "Full article text."
    assert item.source == "manual"
    assert item.url == "https://example.com/story"


def test_fetch_article_without_metadata_title():
    with patch("zenu.sources.scraper.trafilatura") as mock_traf:
        mock_traf.fetch_url.return_value = "<html>...</html>"
        mock_traf.extract.return_value = "Text."
        mock_traf.extract_metadata.return_value = None
        item = fetch_article("https://example.com/story")

    assert item.title == "Untitled Article"


def test_fetch_article_download_failure():
    with patch("zenu.sources.scraper.trafilatura") as mock_traf:
        mock_traf.fetch_url.return_value = None
        with pytest.raises(ExternalServiceError):
            fetch_article("https://example.com/missing")


def test_fetch_article_no_text():
    with patch("zenu.sources.scraper.trafilatura") as mock_traf:
        mock_traf.fetch_url.return_value = "<html></html>"
        mock_traf.extract.return_value = None
        with pytest.raises(ExternalServiceError, match="No article text"):
            fetch_article("https://example.com/empty")
