"""Pydantic data models for the script pipeline, the stores and playback."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CATEGORIES = (
    "politics",
    "sports",
    "entertainment",
    "business",
    "health",
    "technology",
    "general",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- Stage 1: Fetch ---


class RawNewsItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    title: str
    content: str = ""
    url: str = ""
    published_at: datetime = Field(default_factory=utcnow)


# --- Stage 2: Clean & summarize ---


class CleanedReply(BaseModel):
    """Structured reply expected from the cleaning prompt."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    summary: str = ""
    relevance_score: float | None = Field(default=None, alias="relevanceScore")
    category: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            return ""
        normalized = value.strip().lower()
        return normalized if normalized in CATEGORIES else "general"

    @field_validator("relevance_score")
    @classmethod
    def _clamp_relevance(cls, value: float | None) -> float | None:
        if value is None:
            return None
        return max(0.0, min(10.0, value))


class CleanedNewsItem(BaseModel):
    id: str
    source: str
    title: str
    summary: str
    category: str = "general"
    relevance_score: float = Field(default=7, ge=0, le=10)
    url: str = ""


# --- Stage 3: Tone rewrite ---


class StyledNewsItem(BaseModel):
    id: str
    original_title: str
    styled_content: str
    tone: str = "neutral"
    language: str = "English"
    emphasis: list[str] = Field(default_factory=list)
    category: str = "general"
    source: str = ""


# --- Presenter profile ---


class ShowSegment(BaseModel):
    section: str
    duration: int = 60  # seconds, advisory
    order: int


class PresenterProfile(BaseModel):
    user_id: str
    preferred_language: list[str] = Field(default_factory=lambda: ["English"])
    speaking_speed: Literal["slow", "medium", "fast"] = "medium"
    signature_intro: str = ""
    signature_outro: str = ""
    topic_preferences: list[str] = Field(default_factory=list)
    show_structure: list[ShowSegment] = Field(default_factory=list)
    voice_sample: str = ""
    tone_description: str = ""
    formality_level: Literal["casual", "professional", "mixed"] = "professional"
    use_emojis: bool = False
    onboarding_completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("show_structure")
    @classmethod
    def _unique_orders(cls, value: list[ShowSegment]) -> list[ShowSegment]:
        orders = [segment.order for segment in value]
        if len(orders) != len(set(orders)):
            raise ValueError(f"show_structure order values must be unique, got {orders}")
        return value


# --- Stage 4: Template population ---


class PopulatedSection(BaseModel):
    type: str
    content: str
    duration: int = 60
    order: int = 0


class PopulatedScript(BaseModel):
    sections: list[PopulatedSection] = Field(default_factory=list)


# --- Stage 5: Chunking ---


class ScriptChunk(BaseModel):
    text: str
    emphasis: bool = False
    pause: int = 0  # milliseconds
    notes: str = ""
    section_type: str = ""

    @property
    def is_break(self) -> bool:
        return self.section_type == "break"


class TeleprompterScript(BaseModel):
    chunks: list[ScriptChunk] = Field(default_factory=list)


# --- Persisted script ---


class ScriptStatus(str, Enum):
    DRAFT = "draft"
    PROCESSING = "processing"
    READY = "ready"
    DELIVERED = "delivered"


class Script(BaseModel):
    id: str
    user_id: str
    title: str = "Untitled Script"
    raw_news: list[RawNewsItem] = Field(default_factory=list)
    cleaned_news: list[CleanedNewsItem] = Field(default_factory=list)
    styled_news: list[StyledNewsItem] = Field(default_factory=list)
    populated_script: PopulatedScript = Field(default_factory=PopulatedScript)
    teleprompter_script: TeleprompterScript = Field(default_factory=TeleprompterScript)
    status: ScriptStatus = ScriptStatus.DRAFT
    error: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# --- Pipeline run ---


class PipelineStats(BaseModel):
    news_items_fetched: int = 0
    news_items_cleaned: int = 0
    news_items_styled: int = 0
    sections_generated: int = 0
    teleprompter_chunks: int = 0
    llm_calls: int = 0
    fallbacks: int = 0


class PipelineResult(BaseModel):
    raw_news: list[RawNewsItem] = Field(default_factory=list)
    cleaned_news: list[CleanedNewsItem] = Field(default_factory=list)
    styled_news: list[StyledNewsItem] = Field(default_factory=list)
    populated_script: PopulatedScript = Field(default_factory=PopulatedScript)
    teleprompter_script: TeleprompterScript = Field(default_factory=TeleprompterScript)
    stats: PipelineStats = Field(default_factory=PipelineStats)


class DeliveryResult(BaseModel):
    script_id: str
    teleprompter_url: str
    results: dict[str, dict[str, str | bool]] = Field(default_factory=dict)


class ProfileCompleteness(BaseModel):
    completeness: int = 0  # percent
    missing_fields: list[str] = Field(default_factory=list)
    onboarding_completed: bool = False
