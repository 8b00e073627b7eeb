import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class MoodTrackError(Exception):
    """Base error. Each subclass maps to one failure category in API responses."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.kind


class UnauthorizedError(MoodTrackError):
    kind = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(MoodTrackError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(MoodTrackError):
    """The record store or the insight generator failed."""

    kind = "upstream_failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class WriteConflictError(UpstreamError):
    """Concurrent updates kept winning the compare-and-set on a record."""


def _error_body(kind: str, detail: str) -> dict:
    return {"error": kind, "detail": detail}


async def moodtrack_error_handler(request: Request, exc: MoodTrackError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log("request_failed", path=request.url.path, kind=exc.kind, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.kind, exc.message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal", "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MoodTrackError, moodtrack_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
