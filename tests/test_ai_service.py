"""Tests for the Gemini insight generator."""

from unittest.mock import MagicMock

import pytest

from moodtrack.errors import UpstreamError
from moodtrack.services.ai_service import GeminiInsightGenerator, build_insight_prompt


def test_prompt_lists_moods_in_order():
    prompt = build_insight_prompt([7, 9, 3.5])

    assert "last 3 check-ins" in prompt
    assert "7, 9, 3.5" in prompt


def test_generate_insight_uses_model():
    model = MagicMock()
    model.generate_content.return_value = MagicMock(text="  A calm week overall.  ")
    generator = GeminiInsightGenerator(api_key="key", model=model)

    assert generator.generate_insight([5, 6]) == "A calm week overall."
    prompt = model.generate_content.call_args.args[0]
    assert "5, 6" in prompt


def test_sdk_error_is_upstream_failure():
    model = MagicMock()
    model.generate_content.side_effect = RuntimeError("quota exceeded")
    generator = GeminiInsightGenerator(api_key="key", model=model)

    with pytest.raises(UpstreamError, match="quota exceeded"):
        generator.generate_insight([5])


def test_empty_reply_is_upstream_failure():
    model = MagicMock()
    model.generate_content.return_value = MagicMock(text="   ")
    generator = GeminiInsightGenerator(api_key="key", model=model)

    with pytest.raises(UpstreamError):
        generator.generate_insight([5])


def test_missing_api_key():
    generator = GeminiInsightGenerator(api_key=None)

    with pytest.raises(UpstreamError, match="GOOGLE_API_KEY"):
        generator.generate_insight([5])
