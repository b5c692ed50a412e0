"""Vertical geometry of a rendered teleprompter script.

Rows are stacked top to bottom: a header whenever the section changes, one
block per spoken chunk and a blank spacer for each break chunk. Half a
viewport of padding sits above and below the content so the first and last
chunk can both reach the viewport center.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from zenu.errors import PlaybackError
from zenu.models import ScriptChunk


class FontSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"


FONT_SIZES = list(FontSize)

FONT_PX = {
    FontSize.SMALL: 28,
    FontSize.MEDIUM: 36,
    FontSize.LARGE: 48,
    FontSize.XLARGE: 64,
}

LINE_HEIGHT = 1.5
CHAR_WIDTH = 0.55  # average glyph width as a fraction of font size
CHUNK_MARGIN = 16
HEADER_SCALE = 0.6
HEADER_MARGIN = 24


@dataclass(frozen=True)
class Row:
    kind: str  # "header", "chunk" or "spacer"
    top: float
    height: float
    chunk_index: int | None = None
    label: str = ""

    @property
    def center(self) -> float:
        return self.top + self.height / 2


def _text_lines(text: str, font_px: int, viewport_width: int) -> int:
    per_line = max(1, int(viewport_width / (font_px * CHAR_WIDTH)))
    return max(1, math.ceil(len(text) / per_line))


class ScriptLayout:
    def __init__(
        self,
        chunks: list[ScriptChunk],
        font_size: FontSize,
        viewport_height: int,
        viewport_width: int,
    ) -> None:
        self.font_size = font_size
        self.viewport_height = viewport_height
        self.viewport_width = viewport_width
        self.rows: list[Row] = []

        font_px = FONT_PX[font_size]
        line_px = font_px * LINE_HEIGHT
        y = viewport_height / 2
        current_section = ""

        for index, chunk in enumerate(chunks):
            if chunk.is_break:
                self.rows.append(Row("spacer", y, line_px, chunk_index=index))
                y += line_px
                continue

            if chunk.section_type and chunk.section_type != current_section:
                current_section = chunk.section_type
                height = font_px * HEADER_SCALE * LINE_HEIGHT + HEADER_MARGIN
                self.rows.append(Row("header", y, height, label=current_section))
                y += height

            height = _text_lines(chunk.text, font_px, viewport_width) * line_px + CHUNK_MARGIN
            self.rows.append(Row("chunk", y, height, chunk_index=index))
            y += height

        self.total_height = y + viewport_height / 2
        self._by_chunk = {row.chunk_index: row for row in self.rows if row.chunk_index is not None}

    @property
    def max_scroll(self) -> float:
        return max(0.0, self.total_height - self.viewport_height)

    @property
    def has_chunks(self) -> bool:
        return any(row.kind == "chunk" for row in self.rows)

    def require_chunks(self) -> None:
        if not self.has_chunks:
            raise PlaybackError("Script has no chunks to play")

    def row_for(self, chunk_index: int) -> Row | None:
        return self._by_chunk.get(chunk_index)

    def nearest_chunk(self, center_y: float, tolerance: float = 100) -> int | None:
        """Index of the chunk whose center is closest to ``center_y``, if within tolerance."""
        best: Row | None = None
        for row in self._by_chunk.values():
            distance = abs(row.center - center_y)
            if distance < tolerance and (best is None or distance < abs(best.center - center_y)):
                best = row
        return best.chunk_index if best is not None else None

    def scroll_to_center(self, chunk_index: int) -> float:
        """Scroll position that puts the given chunk at the viewport center."""
        row = self.row_for(chunk_index)
        if row is None:
            return 0.0
        return min(self.max_scroll, max(0.0, row.center - self.viewport_height / 2))
