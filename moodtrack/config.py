import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

from moodtrack.services.streak import HighestStreakRule, StreakPolicy

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "MoodData"
    mood_collection: str = "UserMood"
    google_api_key: str | None = None
    gemini_model: str = "models/gemini-2.5-flash"
    streak_policy: StreakPolicy = StreakPolicy.INCREMENT_ALWAYS
    highest_streak_rule: HighestStreakRule = HighestStreakRule.MOOD_INCREASE
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_json: bool = False
    host: str = "0.0.0.0"
    port: int = 5000


def load_settings() -> Settings:
    """Build settings from the environment (and .env, if present).

    Unknown policy names raise ValueError so a typo fails at startup
    instead of silently changing streak semantics.
    """
    return Settings(
        mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        db_name=os.getenv("DB_NAME", "MoodData"),
        mood_collection=os.getenv("MOOD_COLLECTION", "UserMood"),
        google_api_key=os.getenv("GOOGLE_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "models/gemini-2.5-flash"),
        streak_policy=StreakPolicy(os.getenv("STREAK_POLICY", StreakPolicy.INCREMENT_ALWAYS.value)),
        highest_streak_rule=HighestStreakRule(
            os.getenv("HIGHEST_STREAK_RULE", HighestStreakRule.MOOD_INCREASE.value)
        ),
        cors_origins=_env_list("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=_env_bool("LOG_JSON"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
