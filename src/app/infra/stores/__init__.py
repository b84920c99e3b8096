"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - redis_key_value_store: Store chave/valor usando Redis (Upstash)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryKeyValueStore
from app.infra.stores.redis_key_value_store import RedisKeyValueStore

__all__ = [
    # Memory (dev/test)
    "MemoryKeyValueStore",
    # Redis (Upstash)
    "RedisKeyValueStore",
]
