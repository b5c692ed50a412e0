"""Configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    model_id: str = "gemini-2.5-flash"
    llm_timeout_seconds: float = 20.0
    llm_temperature: float = 0.7
    llm_min_call_interval: float = 0.0  # seconds between LLM calls, 0 disables
    news_sources: list[str] = field(default_factory=lambda: ["vanguard", "punch", "arise"])
    news_limit: int = 10
    news_timeout_seconds: float = 10.0
    data_dir: str = "data"
    teleprompter_tick_ms: int = 50
    teleprompter_default_speed: int = 50
    teleprompter_viewport_height: int = 600
    teleprompter_viewport_width: int = 900
    public_base_url: str = ""

    @property
    def profiles_path(self) -> str:
        return os.path.join(self.data_dir, "profiles.json")

    @property
    def scripts_dir(self) -> str:
        return os.path.join(self.data_dir, "scripts")

    @property
    def prompter_settings_path(self) -> str:
        return os.path.join(self.data_dir, "prompter.json")

    @classmethod
    def from_env(cls) -> Settings:
        sources_raw = os.environ.get("NEWS_SOURCES", "vanguard,punch,arise")
        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY", ""),
            model_id=os.environ.get("GEMINI_MODEL_ID", "gemini-2.5-flash"),
            llm_timeout_seconds=float(os.environ.get("LLM_TIMEOUT_SECONDS", "20")),
            llm_temperature=float(os.environ.get("LLM_TEMPERATURE", "0.7")),
            llm_min_call_interval=float(os.environ.get("LLM_MIN_CALL_INTERVAL", "0")),
            news_sources=[s.strip() for s in sources_raw.split(",") if s.strip()],
            news_limit=int(os.environ.get("NEWS_LIMIT", "10")),
            news_timeout_seconds=float(os.environ.get("NEWS_TIMEOUT_SECONDS", "10")),
            data_dir=os.environ.get("DATA_DIR", "data"),
            teleprompter_tick_ms=int(os.environ.get("TELEPROMPTER_TICK_MS", "50")),
            teleprompter_default_speed=int(os.environ.get("TELEPROMPTER_DEFAULT_SPEED", "50")),
            teleprompter_viewport_height=int(
                os.environ.get("TELEPROMPTER_VIEWPORT_HEIGHT", "600")
            ),
            teleprompter_viewport_width=int(
                os.environ.get("TELEPROMPTER_VIEWPORT_WIDTH", "900")
            ),
            public_base_url=os.environ.get("PUBLIC_BASE_URL", ""),
        )
