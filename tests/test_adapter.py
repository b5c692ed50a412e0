"""Tests for the news source adapter and synthetic fallback."""

import random
from unittest.mock import patch

from zenu.models import RawNewsItem
from zenu.sources.adapter import DefaultNewsAdapter, filter_by_category
from zenu.sources.synthetic import generate_synthetic_news


def _item(i: int, title: str, source: str = "vanguard", url: str | None = None) -> RawNewsItem:
    return RawNewsItem(
        id=f"{source}-{i}",
        source=source,
        title=title,
        content="",
        url=url if url is not None else f"https://example.com/{source}/{i}",
    )


def test_synthetic_news_shape():
    items = generate_synthetic_news("punch", 3, rng=random.Random(1))
    assert [i.id for i in items] == ["punch-mock-0", "punch-mock-1", "punch-mock-2"]
    assert len({i.url for i in items}) == 3
    assert all(i.source == "punch" and i.title and i.content for i in items)


def test_filter_by_category_keywords():
    items = [
        _item(1, "Super Eagles win the match"),
        _item(2, "Senate passes new policy"),
        _item(3, "Weather is fine"),
    ]
    assert [i.id for i in filter_by_category(items, ["sports"])] == ["vanguard-1"]
    assert [i.id for i in filter_by_category(items, ["Sports", "politics"])] == [
        "vanguard-1",
        "vanguard-2",
    ]
    assert filter_by_category(items, []) == items


def test_fetch_source_prefers_rss(sample_settings):
    adapter = DefaultNewsAdapter(sample_settings, rng=random.Random(0))
    with (
        patch("zenu.sources.adapter.fetch_rss_feed") as mock_rss,
        patch("zenu.sources.adapter.scrape_homepage") as mock_scrape,
    ):
        mock_rss.return_value = [_item(1, "From RSS")]
        items = adapter.fetch_source("vanguard", [])

    assert [i.title for i in items] == ["From RSS"]
    mock_scrape.assert_not_called()


def test_fetch_source_scrapes_when_rss_empty(sample_settings):
    adapter = DefaultNewsAdapter(sample_settings, rng=random.Random(0))
    with (
        patch("zenu.sources.adapter.fetch_rss_feed", return_value=[]),
        patch("zenu.sources.adapter.scrape_homepage") as mock_scrape,
    ):
        mock_scrape.return_value = [_item(1, "Scraped", source="punch")]
        items = adapter.fetch_source("punch", [])

    assert [i.title for i in items] == ["Scraped"]
    mock_scrape.assert_called_once_with("https://punchng.com", "punch", timeout=10.0)


def test_fetch_source_synthetic_when_everything_fails(sample_settings):
    adapter = DefaultNewsAdapter(sample_settings, rng=random.Random(0))
    with (
        patch("zenu.sources.adapter.fetch_rss_feed", return_value=[]),
        patch("zenu.sources.adapter.scrape_homepage", return_value=[]),
    ):
        items = adapter.fetch_source("vanguard", [])

    assert len(items) == 5
    assert items[0].id == "vanguard-mock-0"


def test_fetch_source_local_is_synthetic(sample_settings):
    items = DefaultNewsAdapter(sample_settings).fetch_source("local", [])
    assert all(i.source == "local" for i in items)


def test_fetch_source_search_uses_categories_as_queries(sample_settings):
    adapter = DefaultNewsAdapter(sample_settings)
    with patch("zenu.sources.adapter.fetch_duckduckgo_news") as mock_ddg:
        mock_ddg.side_effect = lambda query: [_item(len(query), query, source="duckduckgo")]
        items = adapter.fetch_source("duckduckgo", ["sports", "business"])

    assert [c.args[0] for c in mock_ddg.call_args_list] == ["sports", "business"]
    assert [i.title for i in items] == ["sports", "business"]


def test_fetch_batch_dedups_skips_unknown_and_limits(sample_settings):
    adapter = DefaultNewsAdapter(sample_settings, rng=random.Random(3))
    shared = "https://example.com/shared"

    def fake_fetch(key, categories):
        return [_item(1, f"{key} one", source=key, url=shared), _item(2, f"{key} two", source=key)]

    with patch.object(adapter, "fetch_source", side_effect=fake_fetch):
        items = adapter.fetch_batch(["vanguard", "bogus", "punch"], [], limit=10)

    assert len(items) == 3
    assert sum(i.url == shared for i in items) == 1
    assert all(i.source in ("vanguard", "punch") for i in items)

    with patch.object(adapter, "fetch_source", side_effect=fake_fetch):
        assert len(adapter.fetch_batch(["vanguard", "punch"], [], limit=2)) == 2


def test_fetch_batch_keeps_unfiltered_when_no_category_matches(sample_settings):
    adapter = DefaultNewsAdapter(sample_settings, rng=random.Random(0))
    with patch.object(adapter, "fetch_source", return_value=[_item(1, "Weather is fine")]):
        items = adapter.fetch_batch(["vanguard"], ["sports"], limit=5)

    assert [i.title for i in items] == ["Weather is fine"]
