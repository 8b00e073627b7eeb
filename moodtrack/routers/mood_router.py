from typing import List

from fastapi import APIRouter, Depends

from moodtrack.models.mood import (
    InsightResponse,
    MoodEntry,
    MoodSubmission,
    MoodSubmissionResponse,
    MoodValue,
    StreakResponse,
    WeeklyEntry,
)
from moodtrack.routers.auth_dependency import get_current_user_id, get_mood_service
from moodtrack.services.mood_service import MoodService

router = APIRouter(
    tags=["Mood"],
    dependencies=[Depends(get_current_user_id)]
)


@router.post("/add-mood", response_model=MoodSubmissionResponse)
def add_mood(
    submission: MoodSubmission,
    user_id: str = Depends(get_current_user_id),
    service: MoodService = Depends(get_mood_service),
):
    entry = MoodEntry(date=submission.date, mood=submission.mood)
    record = service.submit_mood(user_id, entry)
    return MoodSubmissionResponse(
        message="Mood entry added!",
        user_id=record.user_id,
        current_streak=record.current_streak,
        highest_streak=record.highest_streak,
        entry_count=len(record.entries),
    )


@router.get("/mood-history/{user_id}", response_model=List[MoodValue])
def get_mood_history(user_id: str, service: MoodService = Depends(get_mood_service)):
    return service.get_history(user_id)


@router.get("/streak", response_model=StreakResponse)
def get_streak(
    user_id: str = Depends(get_current_user_id),
    service: MoodService = Depends(get_mood_service),
):
    return service.get_streak(user_id)


@router.get("/weekly", response_model=List[WeeklyEntry])
def get_weekly_moods(
    user_id: str = Depends(get_current_user_id),
    service: MoodService = Depends(get_mood_service),
):
    return service.get_weekly_view(user_id)


@router.get("/insight", response_model=InsightResponse)
def get_mood_insight(
    user_id: str = Depends(get_current_user_id),
    service: MoodService = Depends(get_mood_service),
):
    insight, moods = service.get_insight(user_id)
    return InsightResponse(insight=insight, moods=moods)
