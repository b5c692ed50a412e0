"""Stage 2: Cleaner – clean and summarize each item for broadcast."""

from __future__ import annotations

import logging

from zenu.errors import ExternalServiceError, ItemProcessingError
from zenu.gemini import CompletionClient, parse_structured_reply
from zenu.models import CleanedNewsItem, CleanedReply, RawNewsItem

logger = logging.getLogger(__name__)

_MAX_TOKENS = 300
_TITLE_CHARS = 100
_SUMMARY_CHARS = 200
_UNPARSED_RELEVANCE = 7
_FAILED_RELEVANCE = 5


def _build_clean_prompt(item: RawNewsItem) -> str:
    return f"""You are a professional news editor. Clean and summarize the following news article
for radio broadcast. Remove any ads, promotional content, or irrelevant information.
Create a concise, clear summary suitable for a radio presenter.

Title: {item.title}
Content: {item.content}

Provide:
1. A cleaned title (max 15 words)
2. A broadcast-ready summary (max 50 words)
3. A relevance score (0-10) for general audience
4. A category (politics, sports, entertainment, business, health, technology, or general)

Format as JSON:
{{
  "title": "cleaned title",
  "summary": "broadcast summary",
  "relevanceScore": 8,
  "category": "politics"
}}"""


def truncated_item(item: RawNewsItem, relevance: float) -> CleanedNewsItem:
    """Deterministic stand-in built from the raw item alone."""
    return CleanedNewsItem(
        id=item.id,
        source=item.source,
        title=item.title[:_TITLE_CHARS],
        summary=item.content[:_SUMMARY_CHARS],
        category="general",
        relevance_score=relevance,
        url=item.url,
    )


class NewsCleaner:
    def __init__(self, client: CompletionClient) -> None:
        self._client = client
        self.fallbacks = 0

    def run(self, raw_items: list[RawNewsItem]) -> list[CleanedNewsItem]:
        cleaned: list[CleanedNewsItem] = []
        for item in raw_items:
            try:
                cleaned.append(self._clean_item(item))
            except ItemProcessingError:
                logger.warning("Cleaner fell back to truncation for %s", item.id, exc_info=True)
                self.fallbacks += 1
                cleaned.append(truncated_item(item, _FAILED_RELEVANCE))

        logger.info("Cleaner: %d items, %d fallbacks", len(cleaned), self.fallbacks)
        return cleaned

    def _clean_item(self, item: RawNewsItem) -> CleanedNewsItem:
        try:
            reply_text = self._client.complete(_build_clean_prompt(item), max_tokens=_MAX_TOKENS)
        except ExternalServiceError as exc:
            raise ItemProcessingError(item.id, "clean", str(exc)) from exc

        reply = parse_structured_reply(reply_text, CleanedReply)
        if reply is None:
            logger.info("Cleaner: unparseable reply for %s, truncating", item.id)
            self.fallbacks += 1
            return truncated_item(item, _UNPARSED_RELEVANCE)

        return CleanedNewsItem(
            id=item.id,
            source=item.source,
            title=reply.title or item.title,
            summary=reply.summary or item.content[:_SUMMARY_CHARS],
            category=reply.category or "general",
            relevance_score=(
                reply.relevance_score
                if reply.relevance_score is not None
                else _UNPARSED_RELEVANCE
            ),
            url=item.url,
        )
