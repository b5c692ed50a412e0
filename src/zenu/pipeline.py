"""Pipeline orchestrator – runs all stages sequentially for one presenter."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date

from zenu.config import Settings
from zenu.errors import StageInputError
from zenu.gemini import CompletionClient
from zenu.models import (
    DeliveryResult,
    PipelineResult,
    PipelineStats,
    PopulatedScript,
    PresenterProfile,
    RawNewsItem,
    Script,
    ScriptStatus,
    ShowSegment,
    TeleprompterScript,
)
from zenu.sources.adapter import NewsSourceAdapter
from zenu.sources.scraper import fetch_article
from zenu.stages.chunker import generate_teleprompter_script
from zenu.stages.cleaner import NewsCleaner
from zenu.stages.fetcher import NewsFetcher
from zenu.stages.stylist import ToneStylist, build_style_descriptor
from zenu.stages.templater import populate_template
from zenu.store import ProfileStore, ScriptStore

logger = logging.getLogger(__name__)

SUPPORTED_DELIVERY_METHODS = ("ui",)


@dataclass
class PipelineContext:
    """Everything one pipeline run needs. Built per run, never shared."""

    settings: Settings
    client: CompletionClient
    adapter: NewsSourceAdapter
    profile: PresenterProfile | None
    rng: random.Random | None = None
    stats: PipelineStats = field(default_factory=PipelineStats)
    _style_descriptor: str | None = field(default=None, repr=False)

    def require_profile(self) -> PresenterProfile:
        if self.profile is None:
            raise StageInputError(
                "Presenter profile not found. Please complete onboarding first.",
                http_status=404,
            )
        return self.profile

    @property
    def style_descriptor(self) -> str:
        if self._style_descriptor is None:
            self._style_descriptor = build_style_descriptor(self.require_profile())
        return self._style_descriptor


def run_pipeline(
    context: PipelineContext,
    sources: list[str] | None = None,
    categories: list[str] | None = None,
    limit: int | None = None,
    show_structure: list[ShowSegment] | None = None,
) -> PipelineResult:
    """Execute the five stages and return every intermediate artifact.

    Sources and limit default to the configured news settings.
    """
    profile = context.require_profile()
    structure = show_structure if show_structure is not None else profile.show_structure
    if not structure:
        raise StageInputError("Presenter profile has no show structure")

    calls_before = context.client.call_count

    logger.info("=== Stage 1: Fetch ===")
    raw_news = NewsFetcher(context.adapter, rng=context.rng).run(
        sources or context.settings.news_sources,
        categories or [],
        limit or context.settings.news_limit,
    )

    logger.info("=== Stage 2: Clean ===")
    cleaner = NewsCleaner(context.client)
    cleaned_news = cleaner.run(raw_news)

    logger.info("=== Stage 3: Style ===")
    stylist = ToneStylist(context.client)
    styled_news = stylist.run(cleaned_news, profile, context.style_descriptor)

    logger.info("=== Stage 4: Template ===")
    populated = populate_template(styled_news, structure, profile)

    logger.info("=== Stage 5: Chunk ===")
    teleprompter = generate_teleprompter_script(populated)

    stats = context.stats
    stats.news_items_fetched = len(raw_news)
    stats.news_items_cleaned = len(cleaned_news)
    stats.news_items_styled = len(styled_news)
    stats.sections_generated = len(populated.sections)
    stats.teleprompter_chunks = len(teleprompter.chunks)
    stats.llm_calls = context.client.call_count - calls_before
    stats.fallbacks = cleaner.fallbacks + stylist.fallbacks

    logger.info(
        "Pipeline done: %d items, %d sections, %d chunks, %d LLM calls, %d fallbacks",
        stats.news_items_fetched,
        stats.sections_generated,
        stats.teleprompter_chunks,
        stats.llm_calls,
        stats.fallbacks,
    )

    return PipelineResult(
        raw_news=raw_news,
        cleaned_news=cleaned_news,
        styled_news=styled_news,
        populated_script=populated,
        teleprompter_script=teleprompter,
        stats=stats.model_copy(),
    )


class ScriptWorkflow:
    """Runs the pipeline on behalf of a user and persists each artifact."""

    def __init__(
        self,
        settings: Settings,
        client: CompletionClient,
        adapter: NewsSourceAdapter,
        profiles: ProfileStore,
        scripts: ScriptStore,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._adapter = adapter
        self._profiles = profiles
        self._scripts = scripts
        self._rng = rng

    def _context(self, user_id: str) -> PipelineContext:
        return PipelineContext(
            settings=self._settings,
            client=self._client,
            adapter=self._adapter,
            profile=self._profiles.find(user_id),
            rng=self._rng,
        )

    def complete_workflow(
        self,
        user_id: str,
        sources: list[str] | None = None,
        categories: list[str] | None = None,
        limit: int | None = None,
    ) -> tuple[Script, PipelineResult]:
        """Fetch through chunking in one go; the script ends up ready."""
        context = self._context(user_id)
        context.require_profile()

        script = self._scripts.create(
            user_id,
            title=f"Script - {date.today().isoformat()}",
            status=ScriptStatus.PROCESSING,
        )
        try:
            result = run_pipeline(context, sources, categories, limit)
        except Exception as exc:
            logger.error("Workflow failed for script %s: %s", script.id, exc)
            self._scripts.update(script.id, status=ScriptStatus.DRAFT, error=str(exc))
            raise

        script = self._scripts.update(
            script.id,
            raw_news=result.raw_news,
            cleaned_news=result.cleaned_news,
            styled_news=result.styled_news,
            populated_script=result.populated_script,
            teleprompter_script=result.teleprompter_script,
            status=ScriptStatus.READY,
            error="",
        )
        logger.info("Script %s ready with %d chunks", script.id, len(result.teleprompter_script.chunks))
        return script, result

    # --- Step-by-step operations ---

    def fetch_news(
        self,
        user_id: str,
        sources: list[str] | None = None,
        categories: list[str] | None = None,
        limit: int | None = None,
    ) -> Script:
        raw_news = NewsFetcher(self._adapter, rng=self._rng).run(
            sources or self._settings.news_sources,
            categories or [],
            limit or self._settings.news_limit,
        )
        return self._scripts.create(user_id, raw_news=raw_news, status=ScriptStatus.PROCESSING)

    def curate_articles(self, user_id: str, urls: list[str]) -> Script:
        """Start a script from hand-picked article URLs instead of a source fetch."""
        if not urls:
            raise StageInputError("At least one article URL is required")
        raw_news = [fetch_article(url) for url in urls]
        logger.info("Curated %d articles for %s", len(raw_news), user_id)
        return self._scripts.create(user_id, raw_news=raw_news, status=ScriptStatus.PROCESSING)

    def clean_news(self, script_id: str, user_id: str, raw_news: list[RawNewsItem] | None = None) -> Script:
        script = self._scripts.get(script_id, user_id)
        items = raw_news if raw_news is not None else script.raw_news
        if not items:
            raise StageInputError("Raw news array is required")
        return self._scripts.update(script_id, cleaned_news=NewsCleaner(self._client).run(items))

    def rewrite_tone(self, script_id: str, user_id: str) -> Script:
        script = self._scripts.get(script_id, user_id)
        if not script.cleaned_news:
            raise StageInputError("Cleaned news array is required")
        context = self._context(user_id)
        styled = ToneStylist(self._client).run(
            script.cleaned_news, context.require_profile(), context.style_descriptor
        )
        return self._scripts.update(script_id, styled_news=styled)

    def populate(
        self,
        script_id: str,
        user_id: str,
        template_override: list[ShowSegment] | None = None,
    ) -> Script:
        script = self._scripts.get(script_id, user_id)
        if not script.styled_news:
            raise StageInputError("Styled news array is required")
        profile = self._context(user_id).require_profile()
        structure = template_override or profile.show_structure
        populated = populate_template(script.styled_news, structure, profile)
        return self._scripts.update(script_id, populated_script=populated)

    def generate_script(self, script_id: str, user_id: str) -> Script:
        script = self._scripts.get(script_id, user_id)
        populated: PopulatedScript = script.populated_script
        if not populated.sections:
            raise StageInputError("Populated script is required")
        teleprompter: TeleprompterScript = generate_teleprompter_script(populated)
        return self._scripts.update(
            script_id, teleprompter_script=teleprompter, status=ScriptStatus.READY
        )

    def deliver(
        self,
        script_id: str,
        user_id: str,
        methods: list[str] | None = None,
    ) -> DeliveryResult:
        return deliver_script(self._settings, self._scripts, script_id, user_id, methods)


def teleprompter_url(settings: Settings, script_id: str) -> str:
    return f"{settings.public_base_url}/teleprompter?scriptId={script_id}"


def deliver_script(
    settings: Settings,
    scripts: ScriptStore,
    script_id: str,
    user_id: str,
    methods: list[str] | None = None,
) -> DeliveryResult:
    """Mark the script delivered and report each requested delivery method."""
    methods = methods or ["ui"]
    scripts.get(script_id, user_id)
    scripts.update(script_id, status=ScriptStatus.DELIVERED)

    url = teleprompter_url(settings, script_id)
    results: dict[str, dict[str, str | bool]] = {}
    for method in methods:
        if method in SUPPORTED_DELIVERY_METHODS:
            results[method] = {"success": True, "url": url}
        else:
            logger.warning("Delivery method %s is not supported", method)
            results[method] = {"success": False, "message": f"{method} delivery is not supported"}

    logger.info("Delivered script %s via %s", script_id, ", ".join(methods))
    return DeliveryResult(script_id=script_id, teleprompter_url=url, results=results)
