"""Filter que injeta campos de contexto em cada record de log.

Campos:
- service: nome fixo do serviço
- correlation_id, run_id (ou outros): lidos de getters no momento do log

Valores passados explicitamente via `extra` têm precedência.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping



class ContextFieldsFilter(logging.Filter):
    """Enriquece records com service e campos de contexto.

    Args:
        service_name: Nome do serviço (ex: "ddd_calendar").
        getters: Nome do campo -> função que lê o valor do contexto atual.
    """

    def __init__(
        self,
        service_name: str,
        getters: Mapping[str, Callable[[], str]] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._getters = dict(getters or {})

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._getters)

    def filter(self, record: logging.LogRecord) -> bool:
        for name, getter in self._getters.items():
            if not getattr(record, name, None):
                setattr(record, name, getter())
        record.service = self._service_name
        return True
