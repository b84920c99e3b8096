"""Redis Key/Value Store: backend durável do cache de eventos padronizados.

Contrato de Keys:
    As keys são hashes canônicos (SHA-256 base64) de eventos.
    Keys são logadas parcialmente em DEBUG.

Leituras em lote usam MGET limitado a MAX_BATCH_KEYS chaves por chamada.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from app.protocols.key_value_store import MAX_BATCH_KEYS, AsyncKeyValueStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo para namespace de eventos padronizados
STANDARD_EVENT_PREFIX = "standard_event:"


def _decode(raw: bytes | str | None) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            # Valor corrompido conta como ausente; o cache recalcula e regrava.
            logger.warning("key_value_undecodable", extra={"size": len(raw)})
            return None
    return raw


class RedisKeyValueStore(AsyncKeyValueStoreProtocol):
    """Store chave/valor usando Redis (Upstash compatível).

    Args:
        async_redis_client: Cliente Redis assíncrono
        prefix: Namespace das chaves
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis[bytes],
        prefix: str = STANDARD_EVENT_PREFIX,
    ) -> None:
        self._redis = async_redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        try:
            raw = await self._redis.get(self._key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler chave no Redis") from exc
        return _decode(raw)

    async def get_many(self, keys: Sequence[str]) -> dict[str, str]:
        if len(keys) > MAX_BATCH_KEYS:
            msg = f"Lote de {len(keys)} chaves excede o limite de {MAX_BATCH_KEYS}"
            raise ValueError(msg)
        if not keys:
            return {}

        try:
            raws = await self._redis.mget([self._key(k) for k in keys])
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler lote de chaves no Redis") from exc

        found: dict[str, str] = {}
        for key, raw in zip(keys, raws):
            value = _decode(raw)
            if value is not None:
                found[key] = value
        return found

    async def put(self, key: str, value: str) -> None:
        try:
            await self._redis.set(self._key(key), value)
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar chave no Redis") from exc
        key_masked = key[:8] + "..." if len(key) > 8 else key
        logger.debug("key_value_stored", extra={"key": key_masked})

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except Exception:
            logger.warning("redis_ping_failed")
            return False
