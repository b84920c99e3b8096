"""Testes do cache de eventos padronizados."""

from __future__ import annotations

import pytest

from app.services.standard_event_cache import StandardEventCache
from tests.fakes.calendar_samples import make_event
from tests.fakes.recording_key_value_store import RecordingKeyValueStore


@pytest.fixture
def store() -> RecordingKeyValueStore:
    return RecordingKeyValueStore()


@pytest.fixture
def cache(store: RecordingKeyValueStore) -> StandardEventCache:
    return StandardEventCache(store)


class TestStandardEventCache:
    """Testes do StandardEventCache."""

    @pytest.mark.asyncio
    async def test_put_then_get(self, cache: StandardEventCache) -> None:
        event = make_event(SUMMARY="Hills, repeats", DESCRIPTION="4x1mi\nuphill")

        await cache.put("k", event)

        assert await cache.get("k") == event

    @pytest.mark.asyncio
    async def test_get_miss(self, cache: StandardEventCache) -> None:
        assert await cache.get("nada") is None

    @pytest.mark.asyncio
    async def test_get_many_splits_batches(
        self, cache: StandardEventCache, store: RecordingKeyValueStore
    ) -> None:
        """150 chaves viram duas leituras (100 + 50) alinhadas à entrada."""
        keys = [f"k{i}" for i in range(150)]
        await cache.put("k0", make_event(SUMMARY="zero"))
        await cache.put("k149", make_event(SUMMARY="último"))

        results = await cache.get_many(keys)

        assert [len(call) for call in store.get_many_calls] == [100, 50]
        assert len(results) == 150
        assert results[0].text("SUMMARY") == "zero"
        assert results[149].text("SUMMARY") == "último"
        assert all(result is None for result in results[1:149])

    @pytest.mark.asyncio
    async def test_get_many_empty(
        self, cache: StandardEventCache, store: RecordingKeyValueStore
    ) -> None:
        assert await cache.get_many([]) == []
        assert store.get_many_calls == []

    @pytest.mark.asyncio
    async def test_read_failures_are_misses(
        self, cache: StandardEventCache, store: RecordingKeyValueStore
    ) -> None:
        await cache.put("k", make_event(SUMMARY="s"))
        store.fail_reads = True

        assert await cache.get("k") is None
        assert await cache.get_many(["k", "j"]) == [None, None]

    @pytest.mark.asyncio
    async def test_write_failures_are_swallowed(
        self, cache: StandardEventCache, store: RecordingKeyValueStore
    ) -> None:
        store.fail_writes = True

        await cache.put("k", make_event(SUMMARY="s"))

        assert len(store.put_calls) == 1
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_invalid_entry_is_miss(
        self, cache: StandardEventCache, store: RecordingKeyValueStore
    ) -> None:
        """Entrada que não é um VEVENT válido é tratada como ausente."""
        await store.put("lixo", "isto não é iCalendar")
        await store.put("calendario", "BEGIN:VCALENDAR\r\nEND:VCALENDAR\r\n")

        assert await cache.get("lixo") is None
        assert await cache.get_many(["lixo", "calendario"]) == [None, None]
