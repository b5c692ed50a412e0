"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from zenu.config import Settings
from zenu.models import (
    CleanedNewsItem,
    PresenterProfile,
    RawNewsItem,
    ShowSegment,
    StyledNewsItem,
)
from zenu.store import DEFAULT_SHOW_STRUCTURE


class MockLLMClient:
    """A mock completion client that returns pre-configured responses.

    An exception instance in the response list is raised instead of returned.
    Once the list runs out every call returns ``default``.
    """

    def __init__(self, default: str = "") -> None:
        self.call_count = 0
        self.prompts: list[str] = []
        self.default = default
        self._responses: list[Any] = []
        self._response_index = 0

    def set_responses(self, responses: list[Any]) -> None:
        self._responses = responses
        self._response_index = 0

    def complete(self, prompt: str, max_tokens: int = 500) -> str:
        self.call_count += 1
        self.prompts.append(prompt)

        if self._response_index < len(self._responses):
            resp = self._responses[self._response_index]
            self._response_index += 1
            if isinstance(resp, Exception):
                raise resp
            return resp
        return self.default


class StaticNewsAdapter:
    """News adapter returning a fixed batch and recording each request."""

    def __init__(self, items: list[RawNewsItem]) -> None:
        self.items = items
        self.requests: list[tuple[list[str], list[str], int]] = []

    def fetch_batch(
        self, sources: list[str], categories: list[str], limit: int
    ) -> list[RawNewsItem]:
        self.requests.append((sources, categories, limit))
        return list(self.items[:limit])


@pytest.fixture
def mock_client() -> MockLLMClient:
    return MockLLMClient()


@pytest.fixture
def sample_settings(tmp_path: Path) -> Settings:
    return Settings(
        gemini_api_key="test-key",
        model_id="test-model",
        data_dir=str(tmp_path / "data"),
        public_base_url="https://zenu.example",
    )


@pytest.fixture
def sample_profile() -> PresenterProfile:
    return PresenterProfile(
        user_id="user-1",
        preferred_language=["English", "Pidgin"],
        speaking_speed="fast",
        signature_intro="Oya! Good morning Lagos, na your girl Tolu on the mic.",
        signature_outro="Na so we go do am. Stay blessed, Lagos!",
        topic_preferences=["sports", "business"],
        show_structure=[segment.model_copy() for segment in DEFAULT_SHOW_STRUCTURE],
        tone_description="Warm, high energy, playful",
        formality_level="casual",
        use_emojis=False,
        onboarding_completed=True,
    )


@pytest.fixture
def sample_raw() -> list[RawNewsItem]:
    return [
        RawNewsItem(
            id="vanguard-1",
            source="vanguard",
            title="Super Eagles Win Friendly Match",
            content="The Super Eagles defeated Ghana 2-1 in a friendly match in Lagos on Sunday.",
            url="https://example.com/eagles",
        ),
        RawNewsItem(
            id="punch-1",
            source="punch",
            title="Naira Gains Against Dollar",
            content="The naira appreciated at the official market as investment inflows rose.",
            url="https://example.com/naira",
        ),
        RawNewsItem(
            id="arise-1",
            source="arise",
            title="Nollywood Star Wins Award",
            content="A Nollywood actress won best performance at an international film festival.",
            url="https://example.com/nollywood",
        ),
    ]


@pytest.fixture
def sample_cleaned() -> list[CleanedNewsItem]:
    return [
        CleanedNewsItem(
            id="vanguard-1",
            source="vanguard",
            title="Super Eagles Beat Ghana",
            summary="The Super Eagles beat Ghana 2-1 in Lagos.",
            category="sports",
            relevance_score=8,
        ),
        CleanedNewsItem(
            id="arise-1",
            source="arise",
            title="Nollywood Star Honoured",
            summary="A Nollywood actress won an international award.",
            category="entertainment",
            relevance_score=6,
        ),
    ]


def make_styled(count: int, category: str = "politics") -> list[StyledNewsItem]:
    return [
        StyledNewsItem(
            id=f"item-{i}",
            original_title=f"Title {i}",
            styled_content=f"Styled story {i}",
            category=category,
        )
        for i in range(1, count + 1)
    ]


def segments(*names: str) -> list[ShowSegment]:
    return [ShowSegment(section=name, order=i) for i, name in enumerate(names, start=1)]
