"""Teleprompter playback state machine.

States are STOPPED (initial), PLAYING and PAUSED. Events are play, pause,
tick, chunk-pause-expire and restart. Every timer goes through the injected
``Clock``; nothing here touches wall time directly.

The active chunk is whatever rendered chunk sits nearest the viewport
center. ``chunk_index`` is a cache of that, so dragging the script with
``scroll_by`` moves it too.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable

from zenu.errors import PlaybackError
from zenu.models import ScriptChunk, TeleprompterScript
from zenu.teleprompter.clock import Clock, TimerHandle
from zenu.teleprompter.layout import FONT_SIZES, FontSize, ScriptLayout

logger = logging.getLogger(__name__)

MIN_SPEED = 10
MAX_SPEED = 200
SPEED_DIVISOR = 20  # scroll px per tick = speed / SPEED_DIVISOR
CENTER_TOLERANCE_PX = 100


class PlaybackState(str, Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


def format_elapsed(elapsed_ms: float) -> str:
    """``MM:SS`` for a millisecond duration."""
    seconds = int(elapsed_ms // 1000)
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_section_name(section: str) -> str:
    """``trending_news`` -> ``Trending News``."""
    return re.sub(r"\b\w", lambda m: m.group().upper(), section.replace("_", " "))


class TeleprompterEngine:
    def __init__(
        self,
        script: TeleprompterScript,
        clock: Clock,
        *,
        speed: int = 50,
        font_size: FontSize = FontSize.MEDIUM,
        tick_ms: int = 50,
        viewport_height: int = 600,
        viewport_width: int = 900,
        on_active_change: Callable[[int, ScriptChunk], None] | None = None,
    ) -> None:
        self.chunks = list(script.chunks)
        self._clock = clock
        self._tick_ms = tick_ms
        self._viewport_height = viewport_height
        self._viewport_width = viewport_width
        self.on_active_change = on_active_change

        self.state = PlaybackState.STOPPED
        self.speed = self._clamp_speed(speed)
        self.font_size = font_size
        self.mirrored = False
        self.flipped = False
        self.fullscreen = False
        self.show_notes = False
        self.high_contrast = False

        self.scroll_position = 0.0
        self.chunk_index = 0
        self._started_at: float | None = None

        self._tick_handle: TimerHandle | None = None
        self._resume_handle: TimerHandle | None = None
        self._layout = self._build_layout()

    def _build_layout(self) -> ScriptLayout:
        return ScriptLayout(
            self.chunks, self.font_size, self._viewport_height, self._viewport_width
        )

    @staticmethod
    def _clamp_speed(value: int) -> int:
        return max(MIN_SPEED, min(MAX_SPEED, int(value)))

    # --- Derived state ---

    @property
    def layout(self) -> ScriptLayout:
        return self._layout

    @property
    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        return self._clock.now() - self._started_at

    @property
    def elapsed_display(self) -> str:
        return format_elapsed(self.elapsed_ms)

    @property
    def progress(self) -> float:
        """Scroll progress in percent, 0 to 100."""
        max_scroll = self._layout.max_scroll
        if max_scroll <= 0:
            return 0.0
        return min(100.0, max(0.0, self.scroll_position / max_scroll * 100))

    @property
    def active_chunk(self) -> ScriptChunk | None:
        if 0 <= self.chunk_index < len(self.chunks):
            return self.chunks[self.chunk_index]
        return None

    @property
    def current_notes(self) -> str | None:
        if not self.show_notes:
            return None
        chunk = self.active_chunk
        if chunk is None or not chunk.notes:
            return "No notes for this section"
        return chunk.notes

    @property
    def auto_resume_pending(self) -> bool:
        return self._resume_handle is not None

    # --- Transport ---

    def play(self) -> None:
        if self._resume_handle is not None:
            self._cancel_resume()
        if self.state is PlaybackState.PLAYING:
            return
        self.state = PlaybackState.PLAYING
        if self._started_at is None:
            self._started_at = self._clock.now()
        self._schedule_tick()
        logger.debug("Playback started at scroll %.1f", self.scroll_position)

    def pause(self) -> None:
        """Manual pause. Also cancels a pending auto-resume."""
        self._cancel_resume()
        if self.state is not PlaybackState.PLAYING:
            return
        self.state = PlaybackState.PAUSED
        self._cancel_tick()
        logger.debug("Playback paused at scroll %.1f", self.scroll_position)

    def toggle_play(self) -> None:
        if self.state is PlaybackState.PLAYING:
            self.pause()
        else:
            self.play()

    def restart(self) -> None:
        self._cancel_tick()
        self._cancel_resume()
        self.state = PlaybackState.STOPPED
        self.scroll_position = 0.0
        self.chunk_index = 0
        self._started_at = None
        logger.debug("Playback restarted")

    def close(self) -> None:
        """Cancel every pending timer. Nothing is persisted."""
        self._cancel_tick()
        self._cancel_resume()
        self.state = PlaybackState.STOPPED

    # --- Ticking ---

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._tick_handle = self._clock.call_later(self._tick_ms, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _on_tick(self) -> None:
        self._tick_handle = None
        if self.state is not PlaybackState.PLAYING:
            return
        self.tick()
        if self.state is PlaybackState.PLAYING:
            self._schedule_tick()

    def tick(self) -> None:
        """Advance one tick: scroll, then re-evaluate the active chunk."""
        if self.state is not PlaybackState.PLAYING:
            return
        try:
            self._layout.require_chunks()
        except PlaybackError as exc:
            logger.warning("Tick skipped: %s", exc)
            return

        self.scroll_position += self.speed / SPEED_DIVISOR
        max_scroll = self._layout.max_scroll
        if self.scroll_position >= max_scroll:
            self.scroll_position = max_scroll
            self._update_active(apply_pause=False)
            self.state = PlaybackState.PAUSED
            self._cancel_tick()
            logger.info("Reached end of script at %s", self.elapsed_display)
            return

        self._update_active(apply_pause=True)

    def _update_active(self, *, apply_pause: bool) -> None:
        center_y = self.scroll_position + self._viewport_height / 2
        index = self._layout.nearest_chunk(center_y, CENTER_TOLERANCE_PX)
        if index is None or index == self.chunk_index:
            return

        self.chunk_index = index
        chunk = self.chunks[index]
        if self.on_active_change is not None:
            self.on_active_change(index, chunk)

        if apply_pause and chunk.pause > 0 and self.state is PlaybackState.PLAYING:
            self._auto_pause(chunk.pause)

    # --- Chunk pauses ---

    def _auto_pause(self, pause_ms: int) -> None:
        self.state = PlaybackState.PAUSED
        self._cancel_tick()
        self._cancel_resume()
        self._resume_handle = self._clock.call_later(pause_ms, self._on_pause_expire)
        logger.debug("Auto-pause for %d ms at chunk %d", pause_ms, self.chunk_index)

    def _cancel_resume(self) -> None:
        if self._resume_handle is not None:
            self._resume_handle.cancel()
            self._resume_handle = None

    def _on_pause_expire(self) -> None:
        self._resume_handle = None
        if self.state is PlaybackState.PAUSED:
            self.play()

    # --- Speed and font ---

    def set_speed(self, value: int) -> None:
        self.speed = self._clamp_speed(value)

    def adjust_speed(self, delta: int) -> None:
        self.set_speed(self.speed + delta)

    def set_font_size(self, font_size: FontSize) -> None:
        if font_size == self.font_size:
            return
        self.font_size = FontSize(font_size)
        self._layout = self._build_layout()
        if self.scroll_position > 0:
            self.scroll_position = self._layout.scroll_to_center(self.chunk_index)

    def increase_font_size(self) -> None:
        position = FONT_SIZES.index(self.font_size)
        if position < len(FONT_SIZES) - 1:
            self.set_font_size(FONT_SIZES[position + 1])

    def decrease_font_size(self) -> None:
        position = FONT_SIZES.index(self.font_size)
        if position > 0:
            self.set_font_size(FONT_SIZES[position - 1])

    # --- Display modes ---

    def toggle_mirror(self) -> None:
        self.mirrored = not self.mirrored

    def toggle_flip(self) -> None:
        self.flipped = not self.flipped

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen

    def toggle_notes(self) -> None:
        self.show_notes = not self.show_notes

    def toggle_high_contrast(self) -> None:
        self.high_contrast = not self.high_contrast

    # --- Navigation ---

    def _spoken_indices(self) -> list[int]:
        return [i for i, chunk in enumerate(self.chunks) if not chunk.is_break]

    def _jump_to(self, index: int) -> None:
        self.chunk_index = index
        self.scroll_position = self._layout.scroll_to_center(index)
        if self.on_active_change is not None:
            self.on_active_change(index, self.chunks[index])

    def next_chunk(self) -> None:
        later = [i for i in self._spoken_indices() if i > self.chunk_index]
        if later:
            self._jump_to(later[0])

    def prev_chunk(self) -> None:
        earlier = [i for i in self._spoken_indices() if i < self.chunk_index]
        if earlier:
            self._jump_to(earlier[-1])

    def scroll_by(self, px: float) -> None:
        """Manual drag. Moves the active chunk without triggering its pause."""
        self.scroll_position = min(self._layout.max_scroll, max(0.0, self.scroll_position + px))
        self._update_active(apply_pause=False)
