"""Centralized configuration — all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # YouTube Data API
        self.youtube_api_key: str | None = os.getenv("YOUTUBE_API_KEY")

        # Optional on-disk cache; in-memory when unset
        self.cache_path: str | None = os.getenv("CACHE_PATH")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing required env vars."""
        required = ["YOUTUBE_API_KEY"]
        return [var for var in required if not getattr(self, var.lower())]


settings = Settings()
