"""Stage 1: Fetch – pull raw news through the source adapter."""

from __future__ import annotations

import logging
import random

from zenu.errors import ExternalServiceError, StageInputError
from zenu.models import RawNewsItem
from zenu.sources.adapter import NewsSourceAdapter
from zenu.sources.synthetic import generate_synthetic_news

logger = logging.getLogger(__name__)

_PLACEHOLDER_SOURCE = "zenu"
_PLACEHOLDER_COUNT = 5


class NewsFetcher:
    def __init__(self, adapter: NewsSourceAdapter, rng: random.Random | None = None) -> None:
        self._adapter = adapter
        self._rng = rng

    def run(self, sources: list[str], categories: list[str], limit: int) -> list[RawNewsItem]:
        if limit < 1:
            raise StageInputError(f"News limit must be at least 1, got {limit}")

        try:
            items = self._adapter.fetch_batch(sources, categories, limit)
        except ExternalServiceError:
            logger.exception("News adapter failed for sources=%s", sources)
            items = []

        if not items:
            logger.warning("No news from %s, substituting placeholder content", sources)
            items = generate_synthetic_news(
                _PLACEHOLDER_SOURCE, min(limit, _PLACEHOLDER_COUNT), rng=self._rng
            )

        logger.info("Fetcher: %d items from %d sources", len(items[:limit]), len(sources))
        return items[:limit]
