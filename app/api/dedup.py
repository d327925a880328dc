"""
In-memory guard against accidental double submits of the same post.

Key = user + content; a repeat inside the window is refused (HTTP 429).
Per-process only; entries older than the window are swept once the map grows.
"""
import threading
import time
from functools import lru_cache

from app.config import get_settings

SWEEP_THRESHOLD = 1000


class DuplicateSubmissionGuard:
    def __init__(self, window_seconds: float = 5.0, clock=time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def is_duplicate(self, key: str) -> bool:
        """Return True if `key` was seen within the window, otherwise remember it."""
        now = self._clock()
        with self._lock:
            last = self._seen.get(key)
            if last is not None and now - last < self.window_seconds:
                return True
            self._seen[key] = now
            if len(self._seen) > SWEEP_THRESHOLD:
                self._sweep(now)
            return False

    def _sweep(self, now: float) -> None:
        expired = [k for k, ts in self._seen.items() if now - ts >= self.window_seconds]
        for k in expired:
            del self._seen[k]

    def __len__(self) -> int:
        return len(self._seen)


@lru_cache
def get_submission_guard() -> DuplicateSubmissionGuard:
    return DuplicateSubmissionGuard(get_settings().DUPLICATE_WINDOW_SECONDS)
