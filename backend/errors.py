"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SubscriberCountError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class StatisticsUnavailableError(SubscriberCountError):
    def __init__(self, reason: str):
        super().__init__(f"YouTube statistics unavailable: {reason}", status_code=502)


class MissingAPIKeyError(SubscriberCountError):
    def __init__(self):
        super().__init__("YOUTUBE_API_KEY environment variable is required", status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(SubscriberCountError)
    async def handle_subscriber_count_error(_request: Request, exc: SubscriberCountError):
        logger.error("Page render failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
