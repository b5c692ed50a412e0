"""Placeholder news used when every real source for a request comes back empty."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone

from zenu.models import RawNewsItem

logger = logging.getLogger(__name__)

_TITLES = [
    "President Announces New Economic Policy for Growth",
    "Lagos Traffic: New Solutions Proposed by State Government",
    "Nigerian Tech Startup Raises $10M in Funding",
    "Super Eagles Qualify for International Tournament",
    "Education Reform: Universities to Adopt New Curriculum",
    "Healthcare Workers Begin Nationwide Strike",
    "Nollywood Star Wins International Award",
    "Fuel Prices Expected to Drop Next Week",
    "New Infrastructure Projects Launched in Abuja",
    "Climate Change: Nigeria Commits to Green Energy",
]

_CONTENT = [
    "In a major development today, officials announced significant changes that will "
    "impact millions of Nigerians across the country.",
    "Local authorities have confirmed new measures aimed at addressing long-standing "
    "challenges in the region.",
    "Experts believe this development marks a turning point in the ongoing efforts to "
    "improve conditions nationwide.",
    "Community leaders have welcomed the announcement, calling it a step in the right "
    "direction.",
    "The initiative is expected to create thousands of jobs and boost economic activity "
    "in the coming months.",
]


def generate_synthetic_news(
    source: str,
    count: int = 5,
    rng: random.Random | None = None,
) -> list[RawNewsItem]:
    rng = rng or random.Random()
    now = datetime.now(timezone.utc)
    logger.info("Generating %d synthetic items for %s", count, source)
    return [
        RawNewsItem(
            id=f"{source}-mock-{index}",
            source=source,
            title=_TITLES[index % len(_TITLES)],
            content=_CONTENT[index % len(_CONTENT)],
            url=f"https://example.com/news/{source}/{index}",
            published_at=now - timedelta(seconds=rng.uniform(0, 86400)),
        )
        for index in range(count)
    ]
