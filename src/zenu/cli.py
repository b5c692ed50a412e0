"""Command-line entry point.

  zenu run [--source vanguard --source punch] [--category sports] [--limit 10]
  zenu curate https://punchng.com/some-story/ [URL ...]
  zenu profile show | set preferred_language=English,Yoruba formality_level=casual
  zenu scripts
  zenu deliver SCRIPT_ID
  zenu play SCRIPT_ID [--speed 80] [--font large]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any

from zenu.config import Settings
from zenu.errors import StageInputError, ZenuError
from zenu.gemini import GeminiClient
from zenu.models import ScriptChunk
from zenu.pipeline import ScriptWorkflow, deliver_script
from zenu.sources.adapter import DefaultNewsAdapter
from zenu.store import ProfileStore, ScriptStore
from zenu.teleprompter.clock import AsyncioClock
from zenu.teleprompter.engine import PlaybackState, TeleprompterEngine, format_section_name
from zenu.teleprompter.layout import FontSize
from zenu.teleprompter.settings import (
    PrompterSettings,
    load_prompter_settings,
    save_prompter_settings,
)

logger = logging.getLogger(__name__)

_LIST_FIELDS = {"preferred_language", "topic_preferences"}
_BOOL_FIELDS = {"use_emojis", "onboarding_completed"}


def parse_profile_assignment(assignment: str) -> tuple[str, Any]:
    """``key=value`` -> (key, typed value) for ``profile set``."""
    key, sep, value = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected key=value, got {assignment!r}")

    if key in _LIST_FIELDS:
        return key, [part.strip() for part in value.split(",") if part.strip()]
    if key in _BOOL_FIELDS:
        return key, value.strip().lower() in ("1", "true", "yes", "on")
    if key == "show_structure":
        # intro:30,weather:60,...
        segments = []
        for part in value.split(","):
            section, _, duration = part.strip().partition(":")
            if section:
                segments.append({"section": section, "duration": int(duration) if duration else None})
        return key, segments
    return key, value


def _workflow(settings: Settings, profiles: ProfileStore, scripts: ScriptStore) -> ScriptWorkflow:
    return ScriptWorkflow(
        settings,
        GeminiClient(settings),
        DefaultNewsAdapter(settings),
        profiles,
        scripts,
    )


def _cmd_run(args: argparse.Namespace, settings: Settings) -> None:
    if not settings.gemini_api_key:
        raise SystemExit("GEMINI_API_KEY environment variable is required")
    profiles = ProfileStore(settings.profiles_path)
    scripts = ScriptStore(settings.scripts_dir)
    profiles.get(args.user)

    script, result = _workflow(settings, profiles, scripts).complete_workflow(
        args.user, args.source, args.category, args.limit
    )
    stats = result.stats
    print(f"Script {script.id} ready: {stats.teleprompter_chunks} chunks")
    print(
        f"  fetched={stats.news_items_fetched} cleaned={stats.news_items_cleaned} "
        f"styled={stats.news_items_styled} llm_calls={stats.llm_calls} fallbacks={stats.fallbacks}"
    )


def _cmd_curate(args: argparse.Namespace, settings: Settings) -> None:
    if not settings.gemini_api_key:
        raise SystemExit("GEMINI_API_KEY environment variable is required")
    profiles = ProfileStore(settings.profiles_path)
    scripts = ScriptStore(settings.scripts_dir)
    profiles.get(args.user)

    workflow = _workflow(settings, profiles, scripts)
    script = workflow.curate_articles(args.user, args.urls)
    workflow.clean_news(script.id, args.user)
    workflow.rewrite_tone(script.id, args.user)
    workflow.populate(script.id, args.user)
    script = workflow.generate_script(script.id, args.user)
    print(f"Script {script.id} ready: {len(script.teleprompter_script.chunks)} chunks")


def _cmd_profile(args: argparse.Namespace, settings: Settings) -> None:
    profiles = ProfileStore(settings.profiles_path)
    if args.profile_command == "set":
        patch = dict(parse_profile_assignment(a) for a in args.assignments)
        profile = profiles.upsert(args.user, patch)
    else:
        profile = profiles.get(args.user)

    print(profile.model_dump_json(indent=2))
    completeness = profiles.completeness(args.user)
    print(f"Profile {completeness.completeness}% complete")
    if completeness.missing_fields:
        print(f"  missing: {', '.join(completeness.missing_fields)}")


def _cmd_scripts(args: argparse.Namespace, settings: Settings) -> None:
    scripts = ScriptStore(settings.scripts_dir).list_by_owner(args.user, args.limit)
    if not scripts:
        print("No scripts found.")
        return
    for script in scripts:
        print(
            f"{script.id}  {script.status.value:<10} {script.created_at:%Y-%m-%d %H:%M}  "
            f"{len(script.teleprompter_script.chunks):>3} chunks  {script.title}"
        )


def _cmd_deliver(args: argparse.Namespace, settings: Settings) -> None:
    scripts = ScriptStore(settings.scripts_dir)
    delivery = deliver_script(settings, scripts, args.script_id, args.user, args.method)
    print(f"Teleprompter: {delivery.teleprompter_url}")
    for method, outcome in delivery.results.items():
        print(f"  {method}: {outcome}")


def _print_chunk(chunk: ScriptChunk) -> None:
    if chunk.is_break:
        print()
        return
    marker = "!" if chunk.emphasis else " "
    print(f"{marker} {chunk.text}")


async def _play(engine: TeleprompterEngine, poll_seconds: float = 0.2) -> None:
    """Print chunks as they become active until playback stops for good."""
    last_section = ""

    def on_change(index: int, chunk: ScriptChunk) -> None:
        nonlocal last_section
        if not chunk.is_break and chunk.section_type != last_section:
            last_section = chunk.section_type
            print(f"\n== {format_section_name(last_section)} ==")
        _print_chunk(chunk)

    engine.on_active_change = on_change
    if engine.chunks:
        on_change(0, engine.chunks[0])
    engine.play()
    try:
        while engine.layout.has_chunks and (
            engine.state is PlaybackState.PLAYING or engine.auto_resume_pending
        ):
            await asyncio.sleep(poll_seconds)
    finally:
        engine.close()
    print(f"\n[{engine.elapsed_display}]")


def _cmd_play(args: argparse.Namespace, settings: Settings) -> None:
    script = ScriptStore(settings.scripts_dir).get(args.script_id, args.user)
    if not script.teleprompter_script.chunks:
        raise StageInputError(f"Script {script.id} has no teleprompter chunks")
    prefs = load_prompter_settings(settings.prompter_settings_path)
    if args.speed is not None:
        prefs = prefs.model_copy(update={"speed": args.speed})
    if args.font is not None:
        prefs = prefs.model_copy(update={"font_size": FontSize(args.font)})

    async def main_async() -> None:
        engine = TeleprompterEngine(
            script.teleprompter_script,
            AsyncioClock(),
            speed=settings.teleprompter_default_speed,
            tick_ms=settings.teleprompter_tick_ms,
            viewport_height=settings.teleprompter_viewport_height,
            viewport_width=settings.teleprompter_viewport_width,
        )
        prefs.apply(engine)
        await _play(engine)
        save_prompter_settings(settings.prompter_settings_path, PrompterSettings.from_engine(engine))

    asyncio.run(main_async())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zenu", description="Radio show prep: news to teleprompter")
    parser.add_argument("--user", default="default", help="Presenter user id")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Fetch news and generate a teleprompter script")
    run.add_argument("--source", action="append", help="News source key (repeatable)")
    run.add_argument("--category", action="append", help="Category filter (repeatable)")
    run.add_argument("--limit", type=int, help="Maximum number of news items")
    run.set_defaults(handler=_cmd_run)

    curate = sub.add_parser("curate", help="Build a script from specific article URLs")
    curate.add_argument("urls", nargs="+", metavar="URL")
    curate.set_defaults(handler=_cmd_curate)

    profile = sub.add_parser("profile", help="Show or update the presenter profile")
    profile_sub = profile.add_subparsers(dest="profile_command", required=True)
    profile_sub.add_parser("show")
    profile_set = profile_sub.add_parser("set")
    profile_set.add_argument("assignments", nargs="+", metavar="key=value")
    profile.set_defaults(handler=_cmd_profile)

    scripts = sub.add_parser("scripts", help="List your scripts, newest first")
    scripts.add_argument("--limit", type=int, default=50)
    scripts.set_defaults(handler=_cmd_scripts)

    deliver = sub.add_parser("deliver", help="Mark a script delivered and print its URL")
    deliver.add_argument("script_id")
    deliver.add_argument("--method", action="append", help="Delivery method (default: ui)")
    deliver.set_defaults(handler=_cmd_deliver)

    play = sub.add_parser("play", help="Play a script in the terminal")
    play.add_argument("script_id")
    play.add_argument("--speed", type=int)
    play.add_argument("--font", choices=[size.value for size in FontSize])
    play.set_defaults(handler=_cmd_play)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.from_env()
    try:
        args.handler(args, settings)
    except ZenuError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
