"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from services.cache import MemoryStore, SubscriberCountCache


class FakeClock:
    """Settable clock for cache expiry tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def now() -> datetime:
    """Fixed current time for testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now: datetime) -> FakeClock:
    return FakeClock(now)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def cache(store: MemoryStore, clock: FakeClock) -> SubscriberCountCache:
    return SubscriberCountCache(store, clock=clock)
