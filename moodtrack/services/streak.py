"""
Streak calculation and weekly view for mood records.

Everything here is pure: functions take a record (or its entries) and return
new values without touching storage.
"""

from enum import Enum
from typing import List, Optional, Sequence

from moodtrack.models.mood import MoodEntry, MoodRecord, MoodValue, WeeklyEntry

WEEKLY_VIEW_SIZE = 7


class StreakPolicy(str, Enum):
    """How a new submission moves the current streak."""

    # Every submission extends the streak, whatever its date
    INCREMENT_ALWAYS = "increment_always"
    # Only a submission for the day after the latest stored day extends it
    CONSECUTIVE_DAYS = "consecutive_days"


class HighestStreakRule(str, Enum):
    """When the highest streak is allowed to rise."""

    # Only when the new mood beats the last appended mood
    MOOD_INCREASE = "mood_increase"
    # On every submission, so highest never falls behind current
    RUNNING_MAX = "running_max"


def next_current_streak(record: MoodRecord, entry: MoodEntry, policy: StreakPolicy) -> int:
    if policy is StreakPolicy.INCREMENT_ALWAYS:
        return record.current_streak + 1

    latest_day = max(e.date for e in record.entries)
    gap = (entry.date - latest_day).days
    if gap <= 0:
        # Same day again or a back-filled day
        return record.current_streak
    if gap == 1:
        return record.current_streak + 1
    return 1


def next_highest_streak(
    record: MoodRecord, entry: MoodEntry, new_current: int, rule: HighestStreakRule
) -> int:
    if rule is HighestStreakRule.RUNNING_MAX:
        return max(record.highest_streak, new_current)

    # Last appended entry, not the chronologically latest one
    last_mood = record.entries[-1].mood
    if entry.mood > last_mood:
        return max(record.highest_streak, new_current)
    return record.highest_streak


def apply_entry(
    record: Optional[MoodRecord],
    user_id: str,
    entry: MoodEntry,
    policy: StreakPolicy = StreakPolicy.INCREMENT_ALWAYS,
    highest_rule: HighestStreakRule = HighestStreakRule.MOOD_INCREASE,
) -> MoodRecord:
    """
    Merge a new mood entry into a user's record.

    Args:
        record: The stored record, or None if the user has none yet
        user_id: Identity the record belongs to
        entry: The submitted entry
        policy: Rule for moving the current streak
        highest_rule: Rule for raising the highest streak

    Returns:
        A new MoodRecord carrying the appended entry and updated streaks.
        The version is copied from the input record; the store bumps it.
    """
    if record is None or not record.entries:
        return MoodRecord(
            user_id=user_id,
            entries=[entry],
            current_streak=1,
            highest_streak=1,
            version=record.version if record else 0,
        )

    new_current = next_current_streak(record, entry, policy)
    new_highest = next_highest_streak(record, entry, new_current, highest_rule)

    return MoodRecord(
        user_id=record.user_id,
        entries=[*record.entries, entry],
        current_streak=new_current,
        highest_streak=new_highest,
        version=record.version,
    )


def build_weekly_view(entries: Sequence[MoodEntry]) -> List[WeeklyEntry]:
    # sorted() is stable, so same-day entries keep their submission order
    newest_first = sorted(entries, key=lambda e: e.date, reverse=True)
    return [
        WeeklyEntry(date=e.date.isoformat(), mood=e.mood)
        for e in newest_first[:WEEKLY_VIEW_SIZE]
    ]


def mood_values(entries: Sequence[MoodEntry]) -> List[MoodValue]:
    return [e.mood for e in entries]
