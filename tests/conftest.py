"""Shared fixtures for the mood API tests."""

import pytest
from fastapi.testclient import TestClient

from moodtrack.config import Settings
from moodtrack.db.mood_store import InMemoryMoodStore
from moodtrack.main import create_app
from moodtrack.services.mood_service import MoodService


class StubInsightGenerator:
    """Records the moods it was asked about and returns canned text."""

    def __init__(self, reply="You had a steady week."):
        self.reply = reply
        self.calls = []

    def generate_insight(self, mood_values):
        self.calls.append(list(mood_values))
        return self.reply


@pytest.fixture
def store():
    return InMemoryMoodStore()


@pytest.fixture
def insight_generator():
    return StubInsightGenerator()


@pytest.fixture
def service(store, insight_generator):
    return MoodService(store, insight_generator=insight_generator)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(store, insight_generator, settings):
    app = create_app(store=store, insight_generator=insight_generator, settings=settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"X-User-ID": "user_123"}
