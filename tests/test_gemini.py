"""Tests for the Gemini completion client and reply parsing."""

from unittest.mock import patch

import pytest

from zenu.config import Settings
from zenu.errors import ExternalServiceError
from zenu.gemini import GeminiClient, parse_structured_reply
from zenu.models import CleanedReply


def _settings(interval: float = 0.0) -> Settings:
    return Settings(gemini_api_key="test-key", model_id="test-model", llm_min_call_interval=interval)


def test_complete_spaces_out_calls():
    with (
        patch("zenu.gemini.genai") as mock_genai,
        patch("zenu.gemini.time") as mock_time,
    ):
        mock_genai.Client.return_value.models.generate_content.return_value.text = "ok"
        # first call: start, finish; second call: start 0.5s after the first finished
        mock_time.monotonic.side_effect = [100.0, 100.5, 101.0, 101.2]
        client = GeminiClient(_settings(interval=2.0))

        assert client.complete("one") == "ok"
        assert client.complete("two") == "ok"

    mock_time.sleep.assert_called_once_with(pytest.approx(1.5))
    assert client.call_count == 2


def test_complete_without_interval_never_sleeps():
    with (
        patch("zenu.gemini.genai") as mock_genai,
        patch("zenu.gemini.time") as mock_time,
    ):
        mock_genai.Client.return_value.models.generate_content.return_value.text = None
        mock_time.monotonic.side_effect = [1.0, 1.1, 1.2, 1.3]
        client = GeminiClient(_settings())

        assert client.complete("one") == ""
        client.complete("two")

    mock_time.sleep.assert_not_called()


def test_complete_wraps_sdk_errors():
    with patch("zenu.gemini.genai") as mock_genai:
        mock_genai.Client.return_value.models.generate_content.side_effect = RuntimeError("quota")
        client = GeminiClient(_settings())

        with pytest.raises(ExternalServiceError, match="quota"):
            client.complete("prompt")

    assert client.call_count == 1


def test_parse_structured_reply_fenced_and_prose():
    fenced = '```json\n{"title": "T", "summary": "S", "relevanceScore": 8, "category": "sports"}\n```'
    reply = parse_structured_reply(fenced, CleanedReply)
    assert reply.relevance_score == 8

    prose = 'Here you go: {"title": "T", "summary": "S", "category": "weather"} hope it helps'
    assert parse_structured_reply(prose, CleanedReply).category == "general"

    assert parse_structured_reply("no json at all", CleanedReply) is None
