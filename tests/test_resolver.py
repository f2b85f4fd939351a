"""Tests for redirect resolution and click tracking."""

import asyncio

import pytest

from microlink.database.memory import MemoryLinkStore
from microlink.errors import NotFound, StoreUnavailable
from microlink.resolver import RedirectResolver


class SlowIncrementStore(MemoryLinkStore):
    """Holds click increments until released."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.release = asyncio.Event()

    async def increment_clicks(self, short_code):
        await self.release.wait()
        await super().increment_clicks(short_code)


class BrokenIncrementStore(MemoryLinkStore):
    async def increment_clicks(self, short_code):
        raise StoreUnavailable("Link store is unavailable")


@pytest.mark.asyncio
class TestRedirectResolver:
    """Test RedirectResolver."""

    async def test_resolve_returns_target(self, store, resolver):
        await store.create("vibe", "https://example.com")

        target = await resolver.resolve("vibe")

        assert target.short_code == "vibe"
        assert target.target_url == "https://example.com"

    async def test_resolve_counts_click(self, store, resolver):
        await store.create("vibe", "https://example.com")

        await resolver.resolve("vibe")
        await resolver.drain()

        assert (await store.find_by_code("vibe")).clicks == 1

    async def test_resolve_missing_code(self, store, resolver):
        with pytest.raises(NotFound):
            await resolver.resolve("unknown")

        await resolver.drain()
        assert resolver.pending_clicks == 0
        assert await store.list_all() == []

    async def test_resolve_does_not_wait_for_increment(self, logger):
        store = SlowIncrementStore(logger=logger)
        await store.create("vibe", "https://example.com")
        resolver = RedirectResolver(store=store, logger=logger)

        target = await asyncio.wait_for(resolver.resolve("vibe"), timeout=1)

        assert target.target_url == "https://example.com"
        assert resolver.pending_clicks == 1
        assert (await store.find_by_code("vibe")).clicks == 0

        store.release.set()
        await resolver.close()
        assert resolver.pending_clicks == 0
        assert (await store.find_by_code("vibe")).clicks == 1

    async def test_increment_failure_is_swallowed(self, logger, caplog):
        store = BrokenIncrementStore(logger=logger)
        await store.create("vibe", "https://example.com")
        resolver = RedirectResolver(store=store, logger=logger)

        target = await resolver.resolve("vibe")
        await resolver.drain()

        assert target.target_url == "https://example.com"
        assert resolver.pending_clicks == 0
        assert "Click not recorded for vibe" in caplog.text

    async def test_concurrent_resolves_count_every_click(self, logger):
        store = MemoryLinkStore(latency_seconds=0.001, logger=logger)
        await store.create("hot", "https://example.com")
        await store.increment_clicks("hot")
        resolver = RedirectResolver(store=store, logger=logger)

        targets = await asyncio.gather(*[resolver.resolve("hot") for _ in range(40)])
        await resolver.drain()

        assert all(t.target_url == "https://example.com" for t in targets)
        assert (await store.find_by_code("hot")).clicks == 41

    async def test_lookup_retried_once(self, logger):
        class FlakyLookupStore(MemoryLinkStore):
            failed = False

            async def find_by_code(self, short_code):
                if not self.failed:
                    self.failed = True
                    raise StoreUnavailable("Link store is unavailable")
                return await super().find_by_code(short_code)

        store = FlakyLookupStore(logger=logger)
        await store.create("vibe", "https://example.com")
        resolver = RedirectResolver(store=store, logger=logger, read_retries=1)

        target = await resolver.resolve("vibe")
        await resolver.drain()

        assert target.target_url == "https://example.com"
        assert (await store.find_by_code("vibe")).clicks == 1
