"""Cache de eventos padronizados, endereçado pelo hash canônico.

Valores são eventos VEVENT serializados. Falhas de leitura (store indisponível
ou entrada corrompida) viram miss; falhas de escrita são logadas e engolidas,
já que uma escrita perdida só custa uma chamada redundante ao serviço externo.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from api.codecs.ics import parse, serialize
from app.domain.calendar_object import CalendarObject
from app.observability import record_cache_lookup
from app.protocols.key_value_store import AsyncKeyValueStoreProtocol
from app.services.event_canonicalizer import EVENT_TAG
from utils.errors import FormatError, InfrastructureError

logger = logging.getLogger(__name__)


def _mask(key: str) -> str:
    return key[:8] + "..." if len(key) > 8 else key


class StandardEventCache:
    """Mapeamento hash canônico -> evento padronizado.

    Args:
        store: Store chave/valor durável.
    """

    __slots__ = ("_store",)

    def __init__(self, store: AsyncKeyValueStoreProtocol) -> None:
        self._store = store

    async def get(self, key: str) -> CalendarObject | None:
        """Busca um evento; None em miss ou falha de leitura."""
        try:
            raw = await self._store.get(key)
        except InfrastructureError as exc:
            logger.warning(
                "standard_event_cache_read_failed",
                extra={"key": _mask(key), "error_type": type(exc).__name__},
            )
            return None
        return self._decode(key, raw)

    async def get_many(self, keys: Sequence[str]) -> list[CalendarObject | None]:
        """Busca vários eventos, alinhados por posição com `keys`.

        Lotes são quebrados em blocos de até `store.max_batch_keys` chaves e
        concatenados na ordem de entrada.
        """
        batch_size = self._store.max_batch_keys
        results: list[CalendarObject | None] = []
        for start in range(0, len(keys), batch_size):
            batch = keys[start : start + batch_size]
            try:
                found = await self._store.get_many(batch)
            except InfrastructureError as exc:
                logger.warning(
                    "standard_event_cache_batch_read_failed",
                    extra={"batch_size": len(batch), "error_type": type(exc).__name__},
                )
                found = {}
            results.extend(self._decode(key, found.get(key)) for key in batch)

        hits = sum(1 for event in results if event is not None)
        record_cache_lookup("standard_event_cache", hits=hits, misses=len(results) - hits)
        return results

    async def put(self, key: str, event: CalendarObject) -> None:
        """Grava o evento serializado; falhas são logadas e não propagadas."""
        try:
            await self._store.put(key, serialize(event))
        except InfrastructureError as exc:
            logger.warning(
                "standard_event_cache_write_failed",
                extra={"key": _mask(key), "error_type": type(exc).__name__},
            )
            return
        logger.debug("standard_event_cache_stored", extra={"key": _mask(key)})

    def _decode(self, key: str, raw: str | None) -> CalendarObject | None:
        if raw is None:
            return None
        try:
            return parse(raw, root_tag=EVENT_TAG)
        except FormatError as exc:
            logger.warning(
                "standard_event_cache_entry_invalid",
                extra={"key": _mask(key), "error": str(exc)},
            )
            return None
