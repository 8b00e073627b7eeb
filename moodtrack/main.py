from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodtrack.config import Settings, get_settings
from moodtrack.db.database import connect, ensure_indexes, get_mood_collection
from moodtrack.db.mood_store import MongoMoodStore, MoodRecordStore
from moodtrack.errors import register_error_handlers
from moodtrack.logging_config import setup_logging
from moodtrack.routers import mood_router
from moodtrack.services.ai_service import GeminiInsightGenerator, InsightGenerator
from moodtrack.services.mood_service import MoodService

logger = structlog.get_logger()


def _build_service(
    settings: Settings, store: MoodRecordStore, insight_generator: Optional[InsightGenerator]
) -> MoodService:
    if insight_generator is None:
        insight_generator = GeminiInsightGenerator(settings.google_api_key, settings.gemini_model)
    return MoodService(
        store,
        insight_generator=insight_generator,
        streak_policy=settings.streak_policy,
        highest_rule=settings.highest_streak_rule,
    )


def create_app(
    store: Optional[MoodRecordStore] = None,
    insight_generator: Optional[InsightGenerator] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        store: Record store to use. If omitted, the app connects to MongoDB on
            startup and closes the connection on shutdown.
        insight_generator: Insight backend. Defaults to Gemini.
        settings: Configuration. Defaults to the environment.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(json_mode=settings.log_json, level=settings.log_level)
        client = None
        try:
            if getattr(app.state, "mood_service", None) is None:
                client = connect(settings)
                collection = get_mood_collection(client, settings)
                ensure_indexes(collection)
                app.state.mood_service = _build_service(
                    settings, MongoMoodStore(collection), insight_generator
                )
            logger.info("app_started", streak_policy=settings.streak_policy.value)
            yield
        finally:
            if client is not None:
                client.close()
                logger.info("mongo_closed")

    app = FastAPI(
        title="MoodTrack Backend",
        description="Backend for recording daily moods, streaks and weekly insight.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.mood_service = (
        _build_service(settings, store, insight_generator) if store is not None else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "moodtrack"}

    app.include_router(mood_router.router)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "moodtrack.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
