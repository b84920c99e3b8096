"""Testes do RedisKeyValueStore com mock."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.stores.redis_key_value_store import RedisKeyValueStore
from utils.errors import RedisConnectionError


def _redis() -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.mget = AsyncMock(return_value=[])
    client.set = AsyncMock(return_value=True)
    client.ping = AsyncMock(return_value=True)
    return client


class TestRedisKeyValueStore:
    """Testes do RedisKeyValueStore."""

    @pytest.mark.asyncio
    async def test_get_uses_namespace_and_decodes_bytes(self) -> None:
        """Deve prefixar a chave e decodificar bytes."""
        client = _redis()
        client.get.return_value = b"BEGIN:VEVENT"
        store = RedisKeyValueStore(client)

        value = await store.get("abc")

        assert value == "BEGIN:VEVENT"
        client.get.assert_awaited_once_with("standard_event:abc")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        store = RedisKeyValueStore(_redis())

        assert await store.get("nada") is None

    @pytest.mark.asyncio
    async def test_get_many_uses_single_mget(self) -> None:
        """Deve ler o lote com um MGET e omitir chaves ausentes."""
        client = _redis()
        client.mget.return_value = [b"v1", None, "v3"]
        store = RedisKeyValueStore(client, prefix="t:")

        found = await store.get_many(["k1", "k2", "k3"])

        assert found == {"k1": "v1", "k3": "v3"}
        client.mget.assert_awaited_once_with(["t:k1", "t:k2", "t:k3"])

    @pytest.mark.asyncio
    async def test_get_many_empty_skips_redis(self) -> None:
        client = _redis()
        store = RedisKeyValueStore(client)

        assert await store.get_many([]) == {}
        client.mget.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_many_rejects_oversized_batch(self) -> None:
        """Lotes acima de 100 chaves são erro do chamador."""
        store = RedisKeyValueStore(_redis())

        with pytest.raises(ValueError):
            await store.get_many([f"k{i}" for i in range(101)])

    @pytest.mark.asyncio
    async def test_put_sets_namespaced_key(self) -> None:
        client = _redis()
        store = RedisKeyValueStore(client)

        await store.put("abc", "valor")

        client.set.assert_awaited_once_with("standard_event:abc", "valor")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "mget", "set"])
    async def test_errors_are_wrapped(self, method: str) -> None:
        """Falhas do cliente viram RedisConnectionError."""
        client = _redis()
        getattr(client, method).side_effect = ConnectionError("down")
        store = RedisKeyValueStore(client)

        with pytest.raises(RedisConnectionError):
            if method == "get":
                await store.get("k")
            elif method == "mget":
                await store.get_many(["k"])
            else:
                await store.put("k", "v")

    @pytest.mark.asyncio
    async def test_ping_reports_failure_as_false(self) -> None:
        client = _redis()
        client.ping.side_effect = ConnectionError("down")
        store = RedisKeyValueStore(client)

        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_ping_ok(self) -> None:
        assert await RedisKeyValueStore(_redis()).ping() is True

    @pytest.mark.asyncio
    async def test_undecodable_value_reads_as_missing(self) -> None:
        """Bytes fora de UTF-8 não derrubam a leitura: a chave conta como ausente."""
        client = _redis()
        client.get.return_value = b"\xff\xfe"
        client.mget.return_value = [b"\xff\xfe lixo", b"ok"]
        store = RedisKeyValueStore(client)

        assert await store.get("k") is None
        assert await store.get_many(["k1", "k2"]) == {"k2": "ok"}
