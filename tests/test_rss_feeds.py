"""Tests for the RSS and Google News sources."""

from datetime import datetime, timezone
from unittest.mock import patch

import httpx

from zenu.sources.google_news import fetch_google_news
from zenu.sources.rss_feeds import entry_content, fetch_rss_feed, item_id, parse_published, strip_html


def _make_feed(entries, bozo=False):
    class Feed:
        bozo_exception = None

    feed = Feed()
    feed.bozo = bozo
    feed.entries = entries
    return feed


def _make_entry(title, link, summary="", published_parsed=None, updated_parsed=None):
    entry = {"title": title, "link": link, "summary": summary}
    if published_parsed:
        entry["published_parsed"] = published_parsed
    if updated_parsed:
        entry["updated_parsed"] = updated_parsed
    return entry


def test_strip_html():
    assert strip_html("<b>Hello</b> &amp; world") == "Hello & world"
    assert strip_html("plain text") == "plain text"
    assert strip_html("<a href='x'>link</a>") == "link"


def test_item_id_is_stable_per_url():
    assert item_id("punch", "https://a", 0) == item_id("punch", "https://a", 5)
    assert item_id("punch", "https://a", 0) != item_id("punch", "https://b", 0)
    assert item_id("punch", "https://a", 0).startswith("punch-")


def test_parse_published_prefers_published_then_updated():
    entry = _make_entry("T", "u", updated_parsed=(2026, 2, 2, 10, 0, 0, 0, 0, 0))
    assert parse_published(entry) == datetime(2026, 2, 2, 10, 0, tzinfo=timezone.utc)
    assert parse_published({}) is None


def test_entry_content_reads_content_list():
    entry = {"content": [{"value": "<p>Body text</p>"}]}
    assert entry_content(entry) == "Body text"


def test_fetch_rss_feed_basic():
    entries = [
        _make_entry(
            "Story A",
            "https://example.com/a",
            "<p>Summary A.</p>",
            published_parsed=(2026, 2, 2, 10, 0, 0, 0, 0, 0),
        ),
        _make_entry("", "https://example.com/b", "Summary B."),
    ]

    with (
        patch("zenu.sources.rss_feeds.httpx.Client") as mock_http,
        patch("zenu.sources.rss_feeds.feedparser") as mock_fp,
    ):
        mock_http.return_value.__enter__.return_value.get.return_value.text = "<rss/>"
        mock_fp.parse.return_value = _make_feed(entries)
        result = fetch_rss_feed("https://example.com/feed.xml", "vanguard")

    mock_fp.parse.assert_called_once_with("<rss/>")
    assert len(result) == 2
    assert result[0].title == "Story A"
    assert result[0].content == "Summary A."
    assert result[0].source == "vanguard"
    assert result[0].published_at == datetime(2026, 2, 2, 10, 0, tzinfo=timezone.utc)
    assert result[1].title == "Untitled"


def test_fetch_rss_feed_http_failure():
    with (
        patch("zenu.sources.rss_feeds.httpx.Client") as mock_http,
        patch("zenu.sources.rss_feeds.feedparser") as mock_fp,
    ):
        mock_http.return_value.__enter__.return_value.get.side_effect = httpx.ConnectError("down")
        result = fetch_rss_feed("https://example.com/feed.xml", "punch")

    assert result == []
    mock_fp.parse.assert_not_called()


def test_fetch_rss_feed_bozo_without_entries():
    with (
        patch("zenu.sources.rss_feeds.httpx.Client") as mock_http,
        patch("zenu.sources.rss_feeds.feedparser") as mock_fp,
    ):
        mock_http.return_value.__enter__.return_value.get.return_value.text = "not xml"
        mock_fp.parse.return_value = _make_feed([], bozo=True)
        result = fetch_rss_feed("https://example.com/feed.xml", "punch")

    assert result == []


def test_fetch_google_news_builds_search_url():
    with patch("zenu.sources.google_news.fetch_rss_feed") as mock_fetch:
        mock_fetch.return_value = []
        fetch_google_news("super eagles", timeout=3.0)

    url, source = mock_fetch.call_args.args
    assert url.startswith("https://news.google.com/rss/search?q=super+eagles")
    assert "gl=NG" in url
    assert source == "google_news"
    assert mock_fetch.call_args.kwargs == {"timeout": 3.0}
