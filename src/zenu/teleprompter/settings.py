"""Saved prompter preferences (speed, font size, mirror, flip)."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from zenu.teleprompter.engine import MAX_SPEED, MIN_SPEED, TeleprompterEngine
from zenu.teleprompter.layout import FontSize

logger = logging.getLogger(__name__)


class PrompterSettings(BaseModel):
    speed: int = Field(default=50, ge=MIN_SPEED, le=MAX_SPEED)
    font_size: FontSize = FontSize.MEDIUM
    mirror: bool = False
    flip: bool = False

    @classmethod
    def from_engine(cls, engine: TeleprompterEngine) -> PrompterSettings:
        return cls(
            speed=engine.speed,
            font_size=engine.font_size,
            mirror=engine.mirrored,
            flip=engine.flipped,
        )

    def apply(self, engine: TeleprompterEngine) -> None:
        engine.set_speed(self.speed)
        engine.set_font_size(self.font_size)
        engine.mirrored = self.mirror
        engine.flipped = self.flip


def save_prompter_settings(path: str | Path, settings: PrompterSettings) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings.model_dump_json(indent=2) + "\n", encoding="utf-8")


def load_prompter_settings(path: str | Path) -> PrompterSettings:
    """Saved preferences, or defaults when the file is missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return PrompterSettings()
    try:
        return PrompterSettings.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        logger.warning("Ignoring invalid prompter settings in %s: %s", path, exc)
        return PrompterSettings()
