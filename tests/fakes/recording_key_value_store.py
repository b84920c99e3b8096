"""Store chave/valor em memória que registra chamadas e injeta falhas."""

from __future__ import annotations

from collections.abc import Sequence

from app.infra.stores.memory_stores import MemoryKeyValueStore
from utils.errors import RedisConnectionError


class RecordingKeyValueStore(MemoryKeyValueStore):
    """MemoryKeyValueStore com contadores e chaves de falha configuráveis."""

    def __init__(self, max_batch_keys: int = 100) -> None:
        super().__init__(max_batch_keys=max_batch_keys)
        self.get_calls: list[str] = []
        self.get_many_calls: list[list[str]] = []
        self.put_calls: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    async def get(self, key: str) -> str | None:
        self.get_calls.append(key)
        if self.fail_reads:
            raise RedisConnectionError("leitura indisponível")
        return await super().get(key)

    async def get_many(self, keys: Sequence[str]) -> dict[str, str]:
        self.get_many_calls.append(list(keys))
        if self.fail_reads:
            raise RedisConnectionError("leitura em lote indisponível")
        return await super().get_many(keys)

    async def put(self, key: str, value: str) -> None:
        self.put_calls.append((key, value))
        if self.fail_writes:
            raise RedisConnectionError("escrita indisponível")
        await super().put(key, value)
