"""Factory do cliente Redis usado pelo store de eventos padronizados."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

REDIS_SOCKET_TIMEOUT_SECONDS = 5.0


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis[bytes]:
    """Cliente Redis assíncrono compartilhado pela aplicação.

    Respostas ficam em bytes; o store decodifica cada valor.

    Raises:
        ValueError: REDIS_URL ausente.
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        raise ValueError("REDIS_URL não configurado para o store de eventos")

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        health_check_interval=30,
    )
    logger.info("async_redis_client_created", extra={"component": "standard_event_store"})
    return client
