"""Settings do store de eventos padronizados.

Backend durável do cache endereçado pelo hash canônico dos eventos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StandardEventStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class StandardEventStoreSettings:
    """Configurações do store de eventos padronizados.

    Attributes:
        backend: Backend do store (memory|redis)
        key_prefix: Namespace das chaves no Redis
    """

    backend: StandardEventStoreBackend = "memory"
    key_prefix: str = "standard_event:"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do store.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"STANDARD_EVENT_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "STANDARD_EVENT_STORE_BACKEND=memory proibido em staging/production. "
                "Use Redis."
            )

        if self.backend == "redis" and not base.redis_url:
            errors.append("STANDARD_EVENT_STORE_BACKEND=redis requer REDIS_URL configurado")

        if not self.key_prefix:
            errors.append("STANDARD_EVENT_KEY_PREFIX não pode ser vazio")

        return errors


def _load_store_from_env() -> StandardEventStoreSettings:
    """Carrega StandardEventStoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("STANDARD_EVENT_STORE_BACKEND", "memory").lower()
    backend: StandardEventStoreBackend = "redis" if backend_str == "redis" else "memory"
    return StandardEventStoreSettings(
        backend=backend,
        key_prefix=os.getenv("STANDARD_EVENT_KEY_PREFIX", "standard_event:"),
    )


@lru_cache(maxsize=1)
def get_standard_event_store_settings() -> StandardEventStoreSettings:
    """Retorna instância cacheada de StandardEventStoreSettings."""
    return _load_store_from_env()
