"""Ten-minute TTL cache for the aggregate subscriber count.

The count and its expiry are stored together as one JSON record under a
single key, so a reader never sees a count paired with another write's expiry.

Note: the default MemoryStore lives in the process. With --workers 2 each
worker keeps its own copy and may fetch once per worker. Set CACHE_PATH to
share one FileStore between workers on the same host.
"""

import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

CACHE_KEY = "subscriber_total"
CACHE_TTL = timedelta(minutes=10)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_to_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Process-local key/value store."""

    def __init__(self):
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value


class FileStore:
    """Best-effort key/value store backed by a JSON file.

    Writes go to a temp file in the same directory and are moved into place
    with os.replace, so the file always holds a complete document.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except ValueError as e:
            logger.warning("Ignoring corrupt cache file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".cache-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class SubscriberCountCache:
    """Read/write the cached total with a fixed expiry."""

    def __init__(
        self,
        store: KeyValueStore,
        ttl: timedelta = CACHE_TTL,
        clock: Callable[[], datetime] = utc_now,
        key: str = CACHE_KEY,
    ):
        self._store = store
        self._ttl = ttl
        self._clock = clock
        self._key = key

    def read(self) -> int | None:
        """Return the cached count, or None if absent, malformed or expired."""
        raw = self._store.get(self._key)
        if raw is None:
            return None

        try:
            record = json.loads(raw)
            count = record["count"]
            expiry = normalize_to_utc(datetime.fromisoformat(record["expiry"]))
        except (ValueError, TypeError, KeyError):
            return None

        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            return None
        if self._clock() >= expiry:
            return None
        return count

    def write(self, count: int) -> None:
        expiry = self._clock() + self._ttl
        record = {"count": count, "expiry": expiry.isoformat()}
        self._store.set(self._key, json.dumps(record))
        logger.info("Subscriber count cache updated: %d (expires %s)", count, expiry.isoformat())


def build_store(cache_path: str | None) -> KeyValueStore:
    if cache_path:
        return FileStore(cache_path)
    return MemoryStore()
