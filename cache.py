import logging
import os
import random
import time
from pathlib import Path

from pydantic import ValidationError

from models import CacheEntry, UsageData

log = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def is_cache_valid(now: int, timestamp: int, jitter: int, ttl: int) -> bool:
    """True while the entry is younger than its jittered TTL (all values in ms)."""
    return now - timestamp < ttl + jitter


class CacheStore:
    """Single-entry JSON file cache for the last successful usage fetch."""

    def __init__(self, path: Path, ttl_ms: int, jitter_ms: int):
        self.path = Path(path)
        self.ttl_ms = ttl_ms
        self.jitter_ms = jitter_ms

    def read(self) -> CacheEntry | None:
        try:
            raw = self.path.read_text()
        except (OSError, UnicodeDecodeError) as exc:
            log.debug("No usable cache at %s: %s", self.path, exc)
            return None
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as exc:
            log.debug("Ignoring malformed cache %s: %s", self.path, exc)
            return None

    def write(self, data: UsageData, now: int | None = None) -> CacheEntry | None:
        entry = CacheEntry(
            timestamp=now_ms() if now is None else now,
            jitter=random.randint(-self.jitter_ms, self.jitter_ms),
            data=data,
        )
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w") as fh:
                fh.write(entry.model_dump_json())
            # mode on os.open only applies to newly created files
            os.chmod(self.path, 0o600)
        except OSError as exc:
            log.debug("Cache write to %s failed: %s", self.path, exc)
            return None
        return entry

    def is_fresh(self, entry: CacheEntry, now: int | None = None) -> bool:
        return is_cache_valid(
            now_ms() if now is None else now,
            entry.timestamp,
            entry.jitter,
            self.ttl_ms,
        )
