"""Stage 3: Stylist – rewrite each summary in the presenter's voice."""

from __future__ import annotations

import logging
import re

from zenu.errors import ExternalServiceError, ItemProcessingError
from zenu.gemini import CompletionClient
from zenu.models import CleanedNewsItem, PresenterProfile, StyledNewsItem

logger = logging.getLogger(__name__)

_MAX_TOKENS = 400
_CAPS_WORD = re.compile(r"\b[A-Z]{2,}\b")
_EXCLAIMED_WORD = re.compile(r"\b(\w+)!")


def build_style_descriptor(profile: PresenterProfile) -> str:
    """Prompt fragment describing how this presenter sounds."""
    return f"""Presenter Profile:
- Languages: {", ".join(profile.preferred_language)}
- Speaking Speed: {profile.speaking_speed}
- Signature Intro: "{profile.signature_intro}"
- Signature Outro: "{profile.signature_outro}"
- Tone: {profile.tone_description or "Professional and engaging"}
- Formality: {profile.formality_level}
- Use Emojis: {"Yes" if profile.use_emojis else "No"}"""


def _build_rewrite_prompt(style_descriptor: str, item: CleanedNewsItem) -> str:
    return f"""{style_descriptor}

Rewrite this news story in the presenter's exact speaking style and tone.
Match their energy, cadence, and language preferences.
Make it sound natural for radio broadcast.

Original: {item.summary}

Provide the rewritten version that sounds like this specific presenter would say it.
Include natural pauses, emphasis points, and their signature style."""


def extract_emphasis(text: str) -> list[str]:
    """ALL-CAPS words, then words followed by "!", deduplicated in order."""
    found = _CAPS_WORD.findall(text) + _EXCLAIMED_WORD.findall(text)
    return list(dict.fromkeys(found))


class ToneStylist:
    def __init__(self, client: CompletionClient) -> None:
        self._client = client
        self.fallbacks = 0

    def run(
        self,
        cleaned: list[CleanedNewsItem],
        profile: PresenterProfile,
        style_descriptor: str,
    ) -> list[StyledNewsItem]:
        language = profile.preferred_language[0] if profile.preferred_language else "English"
        styled: list[StyledNewsItem] = []

        for item in cleaned:
            try:
                content = self._rewrite(item, style_descriptor)
            except ItemProcessingError:
                logger.warning("Stylist kept the plain summary for %s", item.id, exc_info=True)
                self.fallbacks += 1
                styled.append(
                    StyledNewsItem(
                        id=item.id,
                        original_title=item.title,
                        styled_content=item.summary,
                        tone="neutral",
                        language="English",
                        emphasis=[],
                        category=item.category,
                        source=item.source,
                    )
                )
                continue

            styled.append(
                StyledNewsItem(
                    id=item.id,
                    original_title=item.title,
                    styled_content=content,
                    tone=profile.formality_level,
                    language=language,
                    emphasis=extract_emphasis(content),
                    category=item.category,
                    source=item.source,
                )
            )

        logger.info("Stylist: %d items, %d fallbacks", len(styled), self.fallbacks)
        return styled

    def _rewrite(self, item: CleanedNewsItem, style_descriptor: str) -> str:
        try:
            reply = self._client.complete(
                _build_rewrite_prompt(style_descriptor, item), max_tokens=_MAX_TOKENS
            )
        except ExternalServiceError as exc:
            raise ItemProcessingError(item.id, "rewrite", str(exc)) from exc

        content = reply.strip()
        if not content:
            raise ItemProcessingError(item.id, "rewrite", "empty reply")
        return content
