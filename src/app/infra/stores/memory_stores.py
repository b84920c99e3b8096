"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.protocols.key_value_store import MAX_BATCH_KEYS, AsyncKeyValueStoreProtocol


class MemoryKeyValueStore(AsyncKeyValueStoreProtocol):
    """Store chave/valor em memória: apenas para dev/test."""

    def __init__(self, max_batch_keys: int = MAX_BATCH_KEYS) -> None:
        self._store: dict[str, str] = {}
        self.max_batch_keys = max_batch_keys

    async def get(self, key: str) -> str | None:
        """Lê chave da memória."""
        return self._store.get(key)

    async def get_many(self, keys: Sequence[str]) -> dict[str, str]:
        """Lê lote de chaves da memória respeitando o limite do backend real."""
        if len(keys) > self.max_batch_keys:
            msg = f"Lote de {len(keys)} chaves excede o limite de {self.max_batch_keys}"
            raise ValueError(msg)
        return {k: self._store[k] for k in keys if k in self._store}

    async def put(self, key: str, value: str) -> None:
        """Grava chave em memória."""
        self._store[key] = value

    def __len__(self) -> int:
        return len(self._store)
