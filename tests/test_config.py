import pytest

from moodtrack.config import load_settings
from moodtrack.services.streak import HighestStreakRule, StreakPolicy


def test_defaults(monkeypatch):
    for name in ["MONGO_URI", "DB_NAME", "STREAK_POLICY", "HIGHEST_STREAK_RULE", "CORS_ORIGINS", "PORT"]:
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.db_name == "MoodData"
    assert settings.mood_collection == "UserMood"
    assert settings.streak_policy is StreakPolicy.INCREMENT_ALWAYS
    assert settings.highest_streak_rule is HighestStreakRule.MOOD_INCREASE
    assert settings.cors_origins == ["*"]
    assert settings.port == 5000


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("STREAK_POLICY", "consecutive_days")
    monkeypatch.setenv("HIGHEST_STREAK_RULE", "running_max")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://app.example.com")
    monkeypatch.setenv("LOG_JSON", "true")

    settings = load_settings()

    assert settings.streak_policy is StreakPolicy.CONSECUTIVE_DAYS
    assert settings.highest_streak_rule is HighestStreakRule.RUNNING_MAX
    assert settings.cors_origins == ["http://localhost:3000", "https://app.example.com"]
    assert settings.log_json is True


def test_unknown_policy(monkeypatch):
    monkeypatch.setenv("STREAK_POLICY", "weekly")
    with pytest.raises(ValueError):
        load_settings()


def test_setup_logging_sets_root_level():
    import logging

    from moodtrack.logging_config import setup_logging

    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    try:
        setup_logging(json_mode=True, level="debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
