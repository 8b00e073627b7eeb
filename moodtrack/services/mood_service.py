from typing import List, Optional

import structlog

from moodtrack.db.mood_store import MoodRecordStore
from moodtrack.errors import NotFoundError, UpstreamError, WriteConflictError
from moodtrack.models.mood import MoodEntry, MoodRecord, MoodValue, StreakResponse, WeeklyEntry
from moodtrack.services.ai_service import InsightGenerator
from moodtrack.services.streak import (
    HighestStreakRule,
    StreakPolicy,
    apply_entry,
    build_weekly_view,
    mood_values,
)

logger = structlog.get_logger()

DEFAULT_WRITE_ATTEMPTS = 3


class MoodService:
    """Ties the record store, streak rules and insight generator together."""

    def __init__(
        self,
        store: MoodRecordStore,
        insight_generator: Optional[InsightGenerator] = None,
        streak_policy: StreakPolicy = StreakPolicy.INCREMENT_ALWAYS,
        highest_rule: HighestStreakRule = HighestStreakRule.MOOD_INCREASE,
        write_attempts: int = DEFAULT_WRITE_ATTEMPTS,
    ):
        self.store = store
        self.insight_generator = insight_generator
        self.streak_policy = streak_policy
        self.highest_rule = highest_rule
        self.write_attempts = write_attempts

    def submit_mood(self, user_id: str, entry: MoodEntry) -> MoodRecord:
        """
        Append an entry to the user's record, creating it on first use.

        Each attempt is one read and one conditional write. If another request
        wrote the record in between, the attempt is repeated on fresh data.

        Raises:
            WriteConflictError: every attempt lost the race
            UpstreamError: the store failed
        """
        for attempt in range(1, self.write_attempts + 1):
            existing = self.store.find_by_user(user_id)
            updated = apply_entry(
                existing, user_id, entry, self.streak_policy, self.highest_rule
            )

            if existing is None:
                written = self.store.create(updated)
            else:
                written = self.store.replace(updated, expected_version=existing.version)

            if written:
                logger.info(
                    "mood_submitted",
                    user_id=user_id,
                    current_streak=updated.current_streak,
                    highest_streak=updated.highest_streak,
                    entries=len(updated.entries),
                )
                return updated

            logger.warning("mood_write_conflict", user_id=user_id, attempt=attempt)

        raise WriteConflictError(
            f"Mood record for {user_id} kept changing; gave up after {self.write_attempts} attempts"
        )

    def get_record(self, user_id: str) -> MoodRecord:
        record = self.store.find_by_user(user_id)
        if record is None:
            raise NotFoundError("User not found")
        return record

    def get_streak(self, user_id: str) -> StreakResponse:
        record = self.get_record(user_id)
        return StreakResponse(
            current_streak=record.current_streak, highest_streak=record.highest_streak
        )

    def get_history(self, user_id: str) -> List[MoodValue]:
        return mood_values(self.get_record(user_id).entries)

    def get_weekly_view(self, user_id: str) -> List[WeeklyEntry]:
        return build_weekly_view(self.get_record(user_id).entries)

    def get_insight(self, user_id: str) -> tuple[str, List[MoodValue]]:
        """Summarize the last 7 moods (by date). Returns the text and the moods, oldest first."""
        weekly = self.get_weekly_view(user_id)
        moods = [item.mood for item in reversed(weekly)]

        if self.insight_generator is None:
            raise UpstreamError("Insight generator is not configured")
        return self.insight_generator.generate_insight(moods), moods
