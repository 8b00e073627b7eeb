from datetime import date, datetime, time, timezone
from typing import Annotated, Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Integer ratings stay integers on the wire; fractional ones are kept as sent
MoodValue = Union[int, float]
BoundedMood = Union[Annotated[int, Field(ge=0, le=10)], Annotated[float, Field(ge=0, le=10)]]


def _to_calendar_date(value: Any) -> Any:
    # Clients send either "2024-01-01" or a full ISO timestamp; only the day counts
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class MoodEntry(BaseModel):
    date: date
    mood: BoundedMood

    @field_validator("date", mode="before")
    @classmethod
    def truncate_to_day(cls, value: Any) -> Any:
        return _to_calendar_date(value)

    def to_document(self) -> dict:
        # BSON has no plain date type, store midnight UTC
        return {
            "date": datetime.combine(self.date, time.min, tzinfo=timezone.utc),
            "mood": self.mood,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "MoodEntry":
        return cls(date=_to_calendar_date(doc["date"]), mood=doc["mood"])


class MoodRecord(BaseModel):
    """One document per user: every submitted entry plus the derived streaks."""

    user_id: str = Field(alias="userId")
    entries: List[MoodEntry] = []
    current_streak: int = Field(0, ge=0, alias="currentStreak")
    highest_streak: int = Field(0, ge=0, alias="highestStreak")
    version: int = 0

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return {
            "userId": self.user_id,
            "entries": [entry.to_document() for entry in self.entries],
            "currentStreak": self.current_streak,
            "highestStreak": self.highest_streak,
            "version": self.version,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "MoodRecord":
        return cls(
            user_id=doc["userId"],
            # Older documents have no version and keep their entries under "mood"
            entries=[MoodEntry.from_document(e) for e in doc.get("entries", doc.get("mood", []))],
            current_streak=doc.get("currentStreak", 0),
            highest_streak=doc.get("highestStreak", 0),
            version=doc.get("version", 0),
        )


# Request payload
class MoodSubmission(MoodEntry):
    model_config = ConfigDict(
        json_schema_extra={"example": {"mood": 7, "date": "2024-01-01"}}
    )


# Responses
class MoodSubmissionResponse(BaseModel):
    message: str
    user_id: str = Field(alias="userId")
    current_streak: int = Field(alias="currentStreak")
    highest_streak: int = Field(alias="highestStreak")
    entry_count: int = Field(alias="entryCount")

    model_config = ConfigDict(populate_by_name=True)


class StreakResponse(BaseModel):
    current_streak: int = Field(alias="currentStreak")
    highest_streak: int = Field(alias="highestStreak")

    model_config = ConfigDict(populate_by_name=True)


class WeeklyEntry(BaseModel):
    date: str
    mood: MoodValue


class InsightResponse(BaseModel):
    insight: str
    moods: List[MoodValue] = []
