from typing import Optional, Protocol, Sequence

import google.generativeai as genai
import structlog

from moodtrack.errors import UpstreamError

logger = structlog.get_logger()

system_instruction = """
    You are the companion inside a mood tracking app: warm, understanding and never judgmental.
    1. Acknowledge how the user has been feeling before offering any suggestion.
    2. Keep a gentle, encouraging tone.
    3. If the ratings suggest a persistent low mood, gently recommend reaching out to someone they trust or a professional.
    4. Keep the answer short: a few sentences, not a lecture.
    """


class InsightGenerator(Protocol):
    def generate_insight(self, mood_values: Sequence[float]) -> str: ...


def _format_mood(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def build_insight_prompt(mood_values: Sequence[float]) -> str:
    """Moods are expected oldest first, on a 0-10 scale."""
    moods = ", ".join(_format_mood(v) for v in mood_values)
    return (
        f"Here are my mood ratings for my last {len(mood_values)} check-ins, "
        f"oldest first, on a scale from 0 (very bad) to 10 (excellent): {moods}.\n"
        "Summarize how my week has gone, point out any trend you notice, "
        "and give me one small, practical suggestion."
    )


class GeminiInsightGenerator:
    """Writes a short mood summary with Google Gemini."""

    def __init__(self, api_key: Optional[str], model_name: str = "models/gemini-2.5-flash", model=None):
        self.api_key = api_key
        self.model_name = model_name
        self._model = model

    def _get_model(self):
        if self._model is not None:
            return self._model
        if not self.api_key:
            raise UpstreamError("Insight generator is not configured (GOOGLE_API_KEY missing)")
        genai.configure(api_key=self.api_key)
        self._model = genai.GenerativeModel(self.model_name, system_instruction=system_instruction)
        return self._model

    def generate_insight(self, mood_values: Sequence[float]) -> str:
        model = self._get_model()
        prompt = build_insight_prompt(mood_values)
        try:
            response = model.generate_content(prompt)
            text = response.text
        except Exception as e:
            logger.error("insight_generation_failed", model=self.model_name, error=str(e))
            raise UpstreamError(f"Insight generation failed: {e}") from e

        if not text or not text.strip():
            raise UpstreamError("Insight generation returned an empty response")
        return text.strip()
