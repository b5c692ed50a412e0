"""Show section kinds and the content rule for each kind."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from zenu.models import PresenterProfile, StyledNewsItem

GENERIC_INTRO = (
    "Good morning everyone! Welcome to the show. I'm your host, and we've got an "
    "amazing lineup for you today."
)
GENERIC_WEATHER = (
    "Let's check out the weather. It's looking like a beautiful day ahead, so make "
    "sure you're prepared!"
)
GENERIC_TRAFFIC = "Traffic update: Roads are looking good this morning. Stay safe out there!"
GENERIC_HUMAN_INTEREST = "Here's an inspiring story that'll warm your heart..."
GENERIC_OUTRO = (
    "That's all for today folks! Thanks for tuning in. Stay blessed and I'll catch "
    "you next time!"
)

_TRENDING = slice(0, 3)
_GLOBAL = slice(3, 5)
_HUMAN_INTEREST_CATEGORIES = ("entertainment", "general")


class SectionKind(str, Enum):
    INTRO = "intro"
    WEATHER = "weather"
    TRENDING_NEWS = "trending_news"
    GLOBAL_HEADLINES = "global_headlines"
    HUMAN_INTEREST = "human_interest"
    TRAFFIC = "traffic"
    OUTRO = "outro"
    OTHER = "other"


_KNOWN = {kind.value: kind for kind in SectionKind if kind is not SectionKind.OTHER}


@dataclass(frozen=True)
class SectionRef:
    """A raw section name resolved once into a kind."""

    kind: SectionKind
    name: str

    @classmethod
    def parse(cls, raw: str) -> SectionRef:
        normalized = "_".join(raw.strip().lower().split())
        return cls(kind=_KNOWN.get(normalized, SectionKind.OTHER), name=raw)


def _numbered(items: list[StyledNewsItem], label: str) -> str:
    return "\n\n".join(
        f"{label} {position}: {item.styled_content}"
        for position, item in enumerate(items, start=1)
    )


def _human_interest(
    ref: SectionRef, styled: list[StyledNewsItem], profile: PresenterProfile
) -> str:
    story = next((s for s in styled if s.category in _HUMAN_INTEREST_CATEGORIES), None)
    return story.styled_content if story else GENERIC_HUMAN_INTEREST


_RULES: dict[SectionKind, Callable[[SectionRef, list[StyledNewsItem], PresenterProfile], str]] = {
    SectionKind.INTRO: lambda ref, styled, profile: profile.signature_intro or GENERIC_INTRO,
    SectionKind.WEATHER: lambda ref, styled, profile: GENERIC_WEATHER,
    SectionKind.TRENDING_NEWS: lambda ref, styled, profile: _numbered(styled[_TRENDING], "Story"),
    SectionKind.GLOBAL_HEADLINES: lambda ref, styled, profile: _numbered(
        styled[_GLOBAL], "International news"
    ),
    SectionKind.HUMAN_INTEREST: _human_interest,
    SectionKind.TRAFFIC: lambda ref, styled, profile: GENERIC_TRAFFIC,
    SectionKind.OUTRO: lambda ref, styled, profile: profile.signature_outro or GENERIC_OUTRO,
    SectionKind.OTHER: lambda ref, styled, profile: f"[{ref.name} section]",
}


def section_content(
    ref: SectionRef,
    styled_news: list[StyledNewsItem],
    profile: PresenterProfile,
) -> str:
    """Content for one section. Every kind has a rule, so this never raises."""
    return _RULES[ref.kind](ref, styled_news, profile)
