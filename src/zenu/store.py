"""JSON-file stores for presenter profiles and scripts."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from zenu.errors import ScriptAccessError, ScriptNotFoundError, StageInputError
from zenu.models import (
    PresenterProfile,
    ProfileCompleteness,
    Script,
    ShowSegment,
    utcnow,
)

logger = logging.getLogger(__name__)

DEFAULT_SHOW_STRUCTURE = [
    ShowSegment(section="intro", duration=30, order=1),
    ShowSegment(section="weather", duration=60, order=2),
    ShowSegment(section="trending_news", duration=180, order=3),
    ShowSegment(section="global_headlines", duration=120, order=4),
    ShowSegment(section="human_interest", duration=90, order=5),
    ShowSegment(section="traffic", duration=60, order=6),
    ShowSegment(section="outro", duration=30, order=7),
]

_COMPLETENESS_FIELDS = (
    "preferred_language",
    "speaking_speed",
    "signature_intro",
    "signature_outro",
    "topic_preferences",
    "show_structure",
    "tone_description",
)


class ProfileFile(BaseModel):
    profiles: dict[str, PresenterProfile] = Field(default_factory=dict)


def normalize_show_structure(
    segments: list[ShowSegment | dict[str, Any]],
) -> list[dict[str, Any]]:
    """Fill in missing order (position, 1-based) and duration (60s).

    Accepts ShowSegment models or plain dicts; anything else is a StageInputError.
    """
    segments = [s.model_dump() if isinstance(s, ShowSegment) else s for s in segments]
    if not all(isinstance(segment, dict) for segment in segments):
        raise StageInputError("Show structure entries must be objects")
    return [
        {
            "section": segment.get("section", ""),
            "duration": segment.get("duration") or 60,
            "order": segment["order"] if segment.get("order") is not None else index + 1,
        }
        for index, segment in enumerate(segments)
    ]


class ProfileStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> ProfileFile:
        if not self._path.exists():
            return ProfileFile()
        return ProfileFile.model_validate(json.loads(self._path.read_text(encoding="utf-8")))

    def _save(self, data: ProfileFile) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(data.model_dump_json(indent=2) + "\n", encoding="utf-8")

    def find(self, user_id: str) -> PresenterProfile | None:
        return self._load().profiles.get(user_id)

    def get(self, user_id: str) -> PresenterProfile:
        """Return the profile, creating one with the default show structure if absent."""
        data = self._load()
        profile = data.profiles.get(user_id)
        if profile is None:
            profile = PresenterProfile(
                user_id=user_id,
                show_structure=[s.model_copy() for s in DEFAULT_SHOW_STRUCTURE],
            )
            data.profiles[user_id] = profile
            self._save(data)
            logger.info("Created default profile for %s", user_id)
        return profile

    def upsert(self, user_id: str, patch: dict[str, Any]) -> PresenterProfile:
        data = self._load()
        existing = data.profiles.get(user_id) or PresenterProfile(user_id=user_id)

        changes = {k: v for k, v in patch.items() if k not in ("user_id", "created_at")}
        if "show_structure" in changes:
            changes["show_structure"] = normalize_show_structure(changes["show_structure"])

        merged = existing.model_dump()
        merged.update(changes)
        merged["updated_at"] = utcnow()
        try:
            profile = PresenterProfile.model_validate(merged)
        except ValidationError as exc:
            raise StageInputError(f"Invalid profile update: {exc}") from exc

        if profile.onboarding_completed and not existing.onboarding_completed:
            logger.info("Onboarding completed for user %s", user_id)

        data.profiles[user_id] = profile
        self._save(data)
        return profile

    def update_show_structure(
        self, user_id: str, segments: list[ShowSegment | dict[str, Any]]
    ) -> list[ShowSegment]:
        if not isinstance(segments, list):
            raise StageInputError("Show structure array is required")
        return self.upsert(user_id, {"show_structure": segments}).show_structure

    def completeness(self, user_id: str) -> ProfileCompleteness:
        profile = self.find(user_id)
        if profile is None:
            return ProfileCompleteness(completeness=0, missing_fields=["All fields"])

        missing = [name for name in _COMPLETENESS_FIELDS if not getattr(profile, name)]
        completed = len(_COMPLETENESS_FIELDS) - len(missing)
        return ProfileCompleteness(
            completeness=round(completed / len(_COMPLETENESS_FIELDS) * 100),
            missing_fields=missing,
            onboarding_completed=profile.onboarding_completed,
        )


class ScriptStore:
    """One JSON document per script under a directory."""

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def _path(self, script_id: str) -> Path:
        return self._dir / f"{script_id}.json"

    def _write(self, script: Script) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        self._path(script.id).write_text(script.model_dump_json(indent=2) + "\n", encoding="utf-8")

    def _read(self, script_id: str) -> Script:
        path = self._path(script_id)
        if not path.exists():
            raise ScriptNotFoundError(script_id)
        return Script.model_validate(json.loads(path.read_text(encoding="utf-8")))

    def create(self, user_id: str, **fields: Any) -> Script:
        script = Script(id=uuid.uuid4().hex, user_id=user_id, **fields)
        self._write(script)
        logger.info("Created script %s for %s", script.id, user_id)
        return script

    def get(self, script_id: str, requester_id: str | None = None) -> Script:
        """Load a script; when ``requester_id`` is given it must own the script."""
        script = self._read(script_id)
        if requester_id is not None and script.user_id != requester_id:
            raise ScriptAccessError(script_id, requester_id)
        return script

    def update(self, script_id: str, **changes: Any) -> Script:
        script = self._read(script_id)
        merged = dict(script)
        merged.update(changes)
        merged["updated_at"] = utcnow()
        updated = Script.model_validate(merged)
        self._write(updated)
        return updated

    def delete(self, script_id: str, requester_id: str | None = None) -> None:
        self.get(script_id, requester_id)
        self._path(script_id).unlink()
        logger.info("Deleted script %s", script_id)

    def list_by_owner(self, user_id: str, limit: int = 50) -> list[Script]:
        """Newest first."""
        if not self._dir.exists():
            return []
        scripts = [
            Script.model_validate(json.loads(path.read_text(encoding="utf-8")))
            for path in self._dir.glob("*.json")
        ]
        owned = [s for s in scripts if s.user_id == user_id]
        owned.sort(key=lambda s: s.created_at, reverse=True)
        return owned[:limit]
