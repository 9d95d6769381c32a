import asyncio

import pytest

from src.application.services.insights_cache import InsightsCache


class CountingFetch:
    def __init__(self, value="summary"):
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        return f"{self.value}-{self.calls}"


async def test_fresh_entry_is_reused_until_ttl_elapses(cache, clock):
    fetch = CountingFetch()

    first = await cache.get_or_fetch("AAPL", 1.0, fetch)
    clock.advance(0.5)
    second = await cache.get_or_fetch("AAPL", 1.0, fetch)
    assert first == second == "summary-1"
    assert fetch.calls == 1

    clock.advance(0.5)
    third = await cache.get_or_fetch("AAPL", 1.0, fetch)
    assert third == "summary-2"
    assert fetch.calls == 2


async def test_keys_are_independent(cache):
    fetch = CountingFetch()

    await cache.get_or_fetch("AAPL", 60, fetch)
    await cache.get_or_fetch("MSFT", 60, fetch)
    assert fetch.calls == 2
    assert len(cache) == 2


async def test_failed_fetch_is_not_stored(cache):
    async def failing():
        raise RuntimeError("provider down")

    with pytest.raises(RuntimeError):
        await cache.get_or_fetch("AAPL", 60, failing)

    fetch = CountingFetch()
    assert await cache.get_or_fetch("AAPL", 60, fetch) == "summary-1"
    assert fetch.calls == 1


async def test_concurrent_misses_share_one_fetch(cache):
    fetch = CountingFetch()

    results = await asyncio.gather(*(cache.get_or_fetch("TSLA", 60, fetch) for _ in range(5)))
    assert results == ["summary-1"] * 5
    assert fetch.calls == 1


async def test_default_clock_is_monotonic():
    cache = InsightsCache()
    fetch = CountingFetch()
    await cache.get_or_fetch("AAPL", 600, fetch)
    await cache.get_or_fetch("AAPL", 600, fetch)
    assert fetch.calls == 1
