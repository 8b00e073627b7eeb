from typing import Annotated, Optional

from fastapi import Header, Request

from moodtrack.errors import UnauthorizedError
from moodtrack.services.mood_service import MoodService


def get_current_user_id(x_user_id: Annotated[Optional[str], Header()] = None) -> str:
    # The auth proxy in front of the API sets X-User-ID after verifying the session
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError("Missing X-User-ID header")
    return x_user_id.strip()


def get_mood_service(request: Request) -> MoodService:
    return request.app.state.mood_service
