"""Tests for the DuckDuckGo search source."""

from datetime import datetime, timezone
from unittest.mock import patch

from duckduckgo_search.exceptions import DuckDuckGoSearchException

from zenu.sources.duckduckgo import fetch_duckduckgo_news, published_at, to_raw_item


def test_published_at_variants():
    assert published_at("2026-02-02T10:00:00Z") == datetime(2026, 2, 2, 10, tzinfo=timezone.utc)
    assert published_at("2026-02-02T10:00:00").tzinfo is timezone.utc
    assert (datetime.now(timezone.utc) - published_at("yesterday-ish")).total_seconds() < 60
    assert published_at("").tzinfo is not None


def test_to_raw_item_requires_title_and_url():
    assert to_raw_item({"title": "  ", "url": "https://a.example"}, 0) is None
    assert to_raw_item({"title": "Fuel queues", "url": None}, 0) is None

    item = to_raw_item({"title": "Fuel queues return", "url": "https://a.example/fuel", "body": None}, 3)
    assert item.source == "duckduckgo"
    assert item.content == ""


def test_fetch_duckduckgo_news_maps_results():
    results = [
        {
            "title": "Eagles Win",
            "url": "https://example.com/eagles",
            "body": "Nigeria beat Ghana.",
            "date": "2026-02-02T10:00:00+00:00",
        },
        {"title": "", "url": "https://example.com/untitled", "body": "x", "date": ""},
        {"title": "Naira Gains", "url": "https://example.com/naira", "body": "Markets rallied.", "date": ""},
    ]

    with patch("zenu.sources.duckduckgo.DDGS") as mock_ddgs:
        mock_ddgs.return_value.news.return_value = results
        items = fetch_duckduckgo_news("Nigeria sports", max_results=5)

    assert [i.title for i in items] == ["Eagles Win", "Naira Gains"]
    assert items[0].content == "Nigeria beat Ghana."
    assert items[0].id != items[1].id
    mock_ddgs.return_value.news.assert_called_once_with("Nigeria sports", timelimit="w", max_results=5)


def test_fetch_duckduckgo_news_search_failure_is_empty():
    with patch("zenu.sources.duckduckgo.DDGS") as mock_ddgs:
        mock_ddgs.return_value.news.side_effect = DuckDuckGoSearchException("ratelimit")
        assert fetch_duckduckgo_news("Nigeria news") == []
