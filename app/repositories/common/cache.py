"""Expiring cache - in-memory TTL store with per-key single-flight population."""

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from loguru import logger

from app.models.common import Entry
from stats_client.errors import UpstreamError

V = TypeVar("V")


def normalize_key(key: str) -> str:
    """Default key normalisation: case-insensitive, surrounding whitespace ignored."""
    return key.strip().lower()


@dataclass(slots=True)
class _Outcome(Generic[V]):
    """Result of one population, shared with every caller waiting on it."""

    value: V | None = None
    error: BaseException | None = None

    def unwrap(self) -> V:
        if self.error is not None:
            raise self.error
        return self.value


class ExpiringCache(Generic[V]):
    """Keyed TTL cache with get-or-populate semantics.

    - a live entry is returned without calling ``populate``
    - an expired entry is evicted when a ``get`` finds it; the rest of the map
      is swept at most once per ``sweep_interval`` (default: the ttl)
    - failed populations are never stored, so the next ``get`` retries
    - concurrent misses on one key share a single ``populate`` call

    The lock only guards the entry and in-flight maps. It is never held while
    ``populate`` runs, so a slow key does not stall unrelated keys.
    """

    def __init__(
        self,
        name: str,
        ttl: float,
        normalize: Callable[[str], str] = normalize_key,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float | None = None,
    ):
        self.name = name
        self.ttl = float(ttl)
        self._sweep_interval = self.ttl if sweep_interval is None else float(sweep_interval)
        self._normalize = normalize
        self._clock = clock
        self._entries: dict[str, Entry[V]] = {}
        self._flights: dict[str, asyncio.Future] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()
        self._hits = 0
        self._misses = 0
        logger.debug("{} cache initialized (ttl={}s)", name, ttl)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        norm = self._normalize(key)
        with self._lock:
            entry = self._entries.get(norm)
            return entry is not None and not entry.is_expired(self._clock())

    async def get(self, key: str, populate: Callable[[], Awaitable[V]]) -> V:
        """Return the cached value for ``key``, populating it on a miss.

        ``populate`` signals failure by raising; the exception reaches every
        caller that joined this population and nothing is cached.
        """
        norm = self._normalize(key)
        loop = asyncio.get_running_loop()

        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self._sweep_interval:
                self._evict_expired(now)

            entry = self._entries.get(norm)
            if entry is not None and entry.is_expired(now):
                del self._entries[norm]
                entry = None
            if entry is not None:
                self._hits += 1
                return entry.value

            flight = self._flights.get(norm)
            leader = flight is None
            if leader:
                flight = loop.create_future()
                self._flights[norm] = flight
                self._misses += 1

        if not leader:
            logger.debug("{}: joining in-flight lookup of {}", self.name, norm)
            outcome = await asyncio.shield(flight)
            return outcome.unwrap()

        logger.debug("{}: cache miss {}", self.name, norm)
        try:
            value = await populate()
        except BaseException as exc:
            error = exc if isinstance(exc, Exception) else UpstreamError("Lookup was cancelled")
            self._land(norm, flight, _Outcome(error=error))
            raise

        self._land(norm, flight, _Outcome(value=value), store=True)
        return value

    def _land(self, norm: str, flight: asyncio.Future, outcome: _Outcome, store: bool = False) -> None:
        """Finish a population: store on success (unless invalidated meanwhile) and wake waiters."""
        with self._lock:
            if self._flights.get(norm) is flight:
                del self._flights[norm]
                if store:
                    self._entries[norm] = Entry(outcome.value, self._clock(), self.ttl)
        if not flight.done():
            flight.set_result(outcome)

    def put(self, key: str, value: V) -> None:
        """Store a value directly, replacing any existing entry."""
        norm = self._normalize(key)
        with self._lock:
            self._entries[norm] = Entry(value, self._clock(), self.ttl)

    def peek(self, key: str) -> V | None:
        """Live cached value without populating, None on a miss."""
        norm = self._normalize(key)
        with self._lock:
            entry = self._entries.get(norm)
            if entry is None or entry.is_expired(self._clock()):
                return None
            return entry.value

    def invalidate(self, key: str) -> bool:
        """Evict ``key`` regardless of expiry. An in-flight lookup for it will not be stored."""
        norm = self._normalize(key)
        with self._lock:
            removed = self._entries.pop(norm, None) is not None
            self._flights.pop(norm, None)
        if removed:
            logger.debug("{}: invalidated {}", self.name, norm)
        return removed

    def purge_expired(self) -> int:
        """Evict every expired entry, returning how many were removed."""
        with self._lock:
            return self._evict_expired(self._clock())

    def _evict_expired(self, now: float) -> int:
        self._last_sweep = now
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for k in expired:
            del self._entries[k]
        return len(expired)

    def stats(self) -> dict:
        with self._lock:
            return {
                "name": self.name,
                "size": len(self._entries),
                "in_flight": len(self._flights),
                "hits": self._hits,
                "misses": self._misses,
            }
