"""
In-memory caches with TTL

- Patient lists per caregiver, to avoid re-reading JSON on every request
- In-progress triage sessions per caregiver (these live only here)
"""
import time
from typing import Any, Dict, Optional, Tuple
from threading import Lock

from disfagia_monitor.core.config import CACHE_TTL_SECONDS, TRIAGE_SESSION_TTL_SECONDS


class TTLCache:
    """
    Thread-safe in-memory cache with TTL (Time To Live)

    Reads refresh nothing; each `set` restarts the entry's lifetime.
    """
    def __init__(self, ttl_seconds: int = 60):
        self.ttl = ttl_seconds
        self._cache: Dict[str, Tuple[Any, float]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache if not expired"""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            value, expiry = entry
            if time.monotonic() >= expiry:
                del self._cache[key]
                return None
            return value

    def set(self, key: str, value: Any):
        """Set value in cache with TTL, dropping any entries that have expired"""
        with self._lock:
            now = time.monotonic()
            expired = [k for k, (_, expiry) in self._cache.items() if now >= expiry]
            for k in expired:
                del self._cache[k]
            self._cache[key] = (value, now + self.ttl)

    def invalidate(self, key: str):
        """Remove key from cache"""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self):
        """Clear all cache entries"""
        with self._lock:
            self._cache.clear()


_patients_cache = TTLCache(ttl_seconds=CACHE_TTL_SECONDS)
_triage_session_cache = TTLCache(ttl_seconds=TRIAGE_SESSION_TTL_SECONDS)


def get_patients_cache() -> TTLCache:
    return _patients_cache


def get_triage_session_cache() -> TTLCache:
    return _triage_session_cache
