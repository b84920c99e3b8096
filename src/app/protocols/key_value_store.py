"""Protocolo de domínio para o store chave/valor durável.

Chaves e valores são strings opacas. Sem transações e sem ordenação entre chaves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

# Limite de chaves por leitura em lote imposto pelo backend
MAX_BATCH_KEYS = 100


class AsyncKeyValueStoreProtocol(ABC):
    """Contrato mínimo assíncrono para o store chave/valor.

    Métodos canônicos:
    - get(key) -> str | None
    - get_many(keys) -> dict[str, str]  (no máximo MAX_BATCH_KEYS por chamada)
    - put(key, value) -> None  (último a escrever vence)
    """

    max_batch_keys: int = MAX_BATCH_KEYS

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Lê uma chave; None se nunca escrita."""

    @abstractmethod
    async def get_many(self, keys: Sequence[str]) -> dict[str, str]:
        """Lê um lote de chaves; chaves ausentes não aparecem no resultado.

        Raises:
            ValueError: Se o lote exceder max_batch_keys.
        """

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Grava incondicionalmente."""

    async def ping(self) -> bool:
        """Verifica disponibilidade do backend (readiness)."""
        return True
