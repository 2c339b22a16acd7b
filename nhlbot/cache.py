#!/usr/bin/env python3
"""
Time-based caches for the NHL Bot
Holds the last successful payload of a slow-moving feed (injuries, news)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Last good payload and the clock reading when it was fetched"""
    payload: Any = None
    fetched_at: float = 0.0


class TTLCache:
    """Single-entry cache with a fixed time to live.

    A payload is served while it is younger than ttl_seconds and not None.
    A failed refresh raises to the caller and keeps the previous entry.
    With single_flight enabled, concurrent misses wait on one shared fetch.
    """

    def __init__(self, name: str, ttl_seconds: float, clock: Callable[[], float] = time.monotonic,
                 single_flight: bool = True, log: Optional[logging.Logger] = None):
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.single_flight = single_flight
        self.logger = log or logger
        self._entry = CacheEntry()
        self._inflight: Optional[asyncio.Future] = None

    def is_fresh(self) -> bool:
        if self._entry.payload is None:
            return False
        return self.clock() - self._entry.fetched_at < self.ttl_seconds

    def peek(self) -> Any:
        """Cached payload if fresh, else None (never fetches)"""
        return self._entry.payload if self.is_fresh() else None

    def invalidate(self):
        self._entry = CacheEntry()

    async def get_or_fetch(self, fetch_fn: Callable[[], Awaitable[Any]]) -> Any:
        if self.is_fresh():
            self.logger.debug(f"{self.name} cache hit")
            return self._entry.payload

        if not self.single_flight:
            return await self._refresh(fetch_fn)

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._refresh(fetch_fn))
        else:
            self.logger.debug(f"{self.name} cache miss joined in-flight fetch")
        return await asyncio.shield(self._inflight)

    async def _refresh(self, fetch_fn: Callable[[], Awaitable[Any]]) -> Any:
        self.logger.debug(f"{self.name} cache miss, fetching")
        payload = await fetch_fn()
        if payload is not None:
            # Payload and timestamp are replaced together
            self._entry = CacheEntry(payload=payload, fetched_at=self.clock())
        return payload


class FeedCaches:
    """The bot's two feed caches"""

    def __init__(self, injuries_ttl: float = 300, news_ttl: float = 600,
                 clock: Callable[[], float] = time.monotonic, single_flight: bool = True):
        self.injuries = TTLCache('injuries', injuries_ttl, clock=clock, single_flight=single_flight)
        self.news = TTLCache('news', news_ttl, clock=clock, single_flight=single_flight)

    @classmethod
    def from_config(cls, config) -> "FeedCaches":
        return cls(
            injuries_ttl=config.getint('Cache', 'injuries_ttl_seconds', fallback=300),
            news_ttl=config.getint('Cache', 'news_ttl_seconds', fallback=600),
            single_flight=config.getboolean('Cache', 'single_flight', fallback=True),
        )
