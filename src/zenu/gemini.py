"""Thin wrapper around the Google GenAI client used as a text-completion service."""

from __future__ import annotations

import json
import logging
import time
from typing import Protocol, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from zenu.config import Settings
from zenu.errors import ExternalServiceError

logger = logging.getLogger(__name__)
T = TypeVar("T", bound=BaseModel)


class CompletionClient(Protocol):
    call_count: int

    def complete(self, prompt: str, max_tokens: int = 500) -> str: ...


class GeminiClient:
    """One attempt per call, bounded by the configured timeout.

    Any SDK error, HTTP error or timeout surfaces as ExternalServiceError so
    callers can fall back per item.
    """

    def __init__(self, settings: Settings) -> None:
        self._client = genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=int(settings.llm_timeout_seconds * 1000)),
        )
        self._model_id = settings.model_id
        self._temperature = settings.llm_temperature
        self._min_call_interval = settings.llm_min_call_interval
        self.call_count = 0
        self._last_call_time: float = 0.0

    def complete(self, prompt: str, max_tokens: int = 500) -> str:
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            max_output_tokens=max_tokens,
        )

        # Space out calls when a minimum interval is configured
        now = time.monotonic()
        elapsed = now - self._last_call_time
        if self._last_call_time > 0 and elapsed < self._min_call_interval:
            time.sleep(self._min_call_interval - elapsed)

        self.call_count += 1
        try:
            response = self._client.models.generate_content(
                model=self._model_id,
                contents=prompt,
                config=config,
            )
        except Exception as exc:
            logger.warning("Gemini call failed: %s", exc)
            raise ExternalServiceError(f"LLM call failed: {exc}") from exc
        finally:
            self._last_call_time = time.monotonic()

        return response.text or ""


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    if not cleaned.startswith("```"):
        return cleaned
    json_lines = []
    in_fence = False
    for line in cleaned.split("\n"):
        if line.strip().startswith("```") and not in_fence:
            in_fence = True
            continue
        if line.strip() == "```" and in_fence:
            break
        if in_fence:
            json_lines.append(line)
    return "\n".join(json_lines)


def parse_structured_reply(text: str, model: type[T]) -> T | None:
    """Parse a JSON object reply into ``model``.

    Returns None when the reply holds no JSON object or the object does not
    validate; callers treat that as their parse-failure branch.
    """
    cleaned = _strip_fences(text)
    try:
        return model.model_validate_json(cleaned)
    except ValidationError:
        pass

    # Replies often wrap the object in prose: take the outermost braces
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(cleaned[start : end + 1])
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return model.model_validate(data)
    except ValidationError:
        return None
