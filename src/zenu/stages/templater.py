"""Stage 4: Templater – lay styled news into the presenter's show structure."""

from __future__ import annotations

import logging

from zenu.models import (
    PopulatedScript,
    PopulatedSection,
    PresenterProfile,
    ShowSegment,
    StyledNewsItem,
)
from zenu.sections import SectionRef, section_content

logger = logging.getLogger(__name__)


def populate_template(
    styled_news: list[StyledNewsItem],
    show_structure: list[ShowSegment],
    profile: PresenterProfile,
) -> PopulatedScript:
    """One section per structure entry, ascending by order. Deterministic."""
    sections = []
    for segment in sorted(show_structure, key=lambda s: s.order):
        ref = SectionRef.parse(segment.section)
        sections.append(
            PopulatedSection(
                type=segment.section,
                content=section_content(ref, styled_news, profile),
                duration=segment.duration,
                order=segment.order,
            )
        )

    logger.info("Templater: %d sections from %d stories", len(sections), len(styled_news))
    return PopulatedScript(sections=sections)
