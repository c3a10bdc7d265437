"""Time-windowed context cache for taskFit.

Stores weather and traffic snapshots under semantic keys (a location, a
coordinate pair, or a location and date) for a bounded time. Lookups through
``get_or_compute`` never fail: when the supplier raises, times out or returns
nothing, a fallback value is generated, cached for the same window, and
returned flagged as a fallback.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContextSource(str, Enum):
    """Where a context value came from."""
    CACHED = "cached"
    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ContextResult(Generic[T]):
    """A context value plus its provenance.

    ``is_fallback`` stays true when a cached fallback is served again, so
    callers can tell synthesized data from a live reading.
    """
    value: T
    source: ContextSource
    synthesized: bool = False

    @property
    def is_fallback(self) -> bool:
        return self.synthesized or self.source == ContextSource.FALLBACK


@dataclass
class _Entry:
    value: Any
    expires_at: float
    synthesized: bool


class ContextCache:
    """In-process TTL cache safe for concurrent use.

    Reads and writes take a lock; suppliers run outside it, so two callers
    missing the same key at once may both call the supplier. The last write wins.
    """

    def __init__(self, name: str, default_ttl: int, clock: Callable[[], float] = time.monotonic):
        self.name = name
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _lookup(self, key: str) -> Optional[_Entry]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now > entry.expires_at:
                del self._entries[key]
                return None
            return entry

    def get(self, key: str) -> Optional[Any]:
        """Return the live value for ``key``, or None if missing or expired."""
        entry = self._lookup(key)
        return entry.value if entry else None

    def set(self, key: str, value: Any, ttl: Optional[int] = None, synthesized: bool = False) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (the cache default if omitted)."""
        ttl = self.default_ttl if ttl is None else ttl
        entry = _Entry(value=value, expires_at=self._clock() + ttl, synthesized=synthesized)
        with self._lock:
            self._entries[key] = entry

    def get_or_compute(
        self,
        key: str,
        ttl_seconds: Optional[int],
        supplier: Callable[[], T],
        fallback: Callable[[], T],
    ) -> ContextResult[T]:
        """Return the cached value for ``key``, computing it on a miss.

        Args:
            key: Semantic lookup key
            ttl_seconds: Time-to-live for a newly stored value (cache default if None)
            supplier: Fetches a live value; may raise or time out
            fallback: Synthesizes a value when the supplier fails; must not raise

        Returns:
            ContextResult with the value and whether it was cached, live or a fallback
        """
        entry = self._lookup(key)
        if entry is not None:
            logger.debug(f"{self.name} cache hit: {key}")
            return ContextResult(entry.value, ContextSource.CACHED, entry.synthesized)

        logger.info(f"{self.name} cache miss: {key}")
        value, source = self._compute(key, supplier, fallback)
        self.set(key, value, ttl_seconds, synthesized=source == ContextSource.FALLBACK)
        return ContextResult(value, source, source == ContextSource.FALLBACK)

    def _compute(self, key: str, supplier: Callable[[], T], fallback: Callable[[], T]) -> Tuple[T, ContextSource]:
        try:
            value = supplier()
        except Exception as e:
            # Upstream failures never reach callers; keep the log free of provider payloads
            logger.warning(f"{self.name} supplier failed for {key}: {type(e).__name__}. Using fallback.")
            return fallback(), ContextSource.FALLBACK
        if value is None:
            logger.warning(f"{self.name} supplier returned nothing for {key}. Using fallback.")
            return fallback(), ContextSource.FALLBACK
        return value, ContextSource.LIVE

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if now > e.expires_at]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
