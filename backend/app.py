"""FastAPI application entry point for the subscriber goal page."""

import logging
import sys

from fastapi import FastAPI, Request, Response

from config import Settings, settings
from errors import register_error_handlers
from services.cache import SubscriberCountCache, build_store
from services.resolver import TotalResolver
from services.youtube import YouTubeCountSource

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def build_resolver(config: Settings) -> TotalResolver:
    """Wire the cache store and YouTube client from settings."""
    cache = SubscriberCountCache(build_store(config.cache_path))
    source = YouTubeCountSource(api_key=config.youtube_api_key)
    return TotalResolver(cache=cache, source=source)


def create_app(config: Settings = settings, resolver: TotalResolver | None = None) -> FastAPI:
    app = FastAPI(title="ReGLOSS Subscriber Goal", version="1.0.0", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.resolver = resolver or build_resolver(config)
    app.state.commit = config.git_sha

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if config.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.page import router as page_router

    app.include_router(page_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = config.validate()
        if missing:
            logger.warning("Missing env vars (page render will fail): %s", ", ".join(missing))

    return app


app = create_app()
