import asyncio

import pytest

from nhlbot.cache import FeedCaches, TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class CountingFetch:
    def __init__(self, results=None):
        self.calls = 0
        self.results = list(results or [])

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        if self.results:
            result = self.results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return {'call': self.calls}


@pytest.mark.asyncio
async def test_reads_within_ttl_fetch_once() -> None:
    clock = FakeClock()
    cache = TTLCache('injuries', 300, clock=clock)
    fetch = CountingFetch()

    first = await cache.get_or_fetch(fetch)
    clock.now += 299
    second = await cache.get_or_fetch(fetch)

    assert fetch.calls == 1
    assert first is second


@pytest.mark.asyncio
async def test_read_after_ttl_refetches_once() -> None:
    clock = FakeClock()
    cache = TTLCache('news', 600, clock=clock)
    fetch = CountingFetch()

    await cache.get_or_fetch(fetch)
    clock.now += 600
    refreshed = await cache.get_or_fetch(fetch)
    await cache.get_or_fetch(fetch)

    assert fetch.calls == 2
    assert refreshed == {'call': 2}


@pytest.mark.asyncio
async def test_concurrent_misses_share_one_fetch() -> None:
    cache = TTLCache('injuries', 300, clock=FakeClock())
    fetch = CountingFetch()

    results = await asyncio.gather(*(cache.get_or_fetch(fetch) for _ in range(5)))

    assert fetch.calls == 1
    assert all(r == {'call': 1} for r in results)


@pytest.mark.asyncio
async def test_without_single_flight_each_miss_fetches() -> None:
    cache = TTLCache('injuries', 300, clock=FakeClock(), single_flight=False)
    fetch = CountingFetch()

    await asyncio.gather(*(cache.get_or_fetch(fetch) for _ in range(3)))

    assert fetch.calls == 3


@pytest.mark.asyncio
async def test_failed_refresh_raises_and_keeps_previous_entry() -> None:
    clock = FakeClock()
    cache = TTLCache('news', 10, clock=clock)
    fetch = CountingFetch([{'items': 1}, RuntimeError("feed down")])

    await cache.get_or_fetch(fetch)
    clock.now += 11
    with pytest.raises(RuntimeError):
        await cache.get_or_fetch(fetch)

    # Stale entry is still held; it becomes fresh again only by a new fetch
    assert cache._entry.payload == {'items': 1}
    assert cache.peek() is None


@pytest.mark.asyncio
async def test_none_payload_is_not_cached() -> None:
    cache = TTLCache('news', 600, clock=FakeClock())
    fetch = CountingFetch([None, {'ok': True}])

    assert await cache.get_or_fetch(fetch) is None
    assert await cache.get_or_fetch(fetch) == {'ok': True}
    assert fetch.calls == 2


@pytest.mark.asyncio
async def test_invalidate_forces_refetch() -> None:
    cache = TTLCache('news', 600, clock=FakeClock())
    fetch = CountingFetch()
    await cache.get_or_fetch(fetch)
    cache.invalidate()
    await cache.get_or_fetch(fetch)
    assert fetch.calls == 2


def test_feed_caches_default_ttls(make_bot) -> None:
    caches = FeedCaches.from_config(make_bot().config)
    assert caches.injuries.ttl_seconds == 300
    assert caches.news.ttl_seconds == 600
    assert caches.injuries.single_flight
