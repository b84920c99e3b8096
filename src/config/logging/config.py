"""Configuração centralizada de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(
        level="INFO",
        service_name="ddd_calendar",
        context_getters={"correlation_id": get_correlation_id, "run_id": get_run_id},
    )

    logger = get_logger(__name__)
    logger.info("calendar_run_completed", extra={"steps": 12})

Mensagens são nomes de evento em snake_case; dados variáveis vão em `extra`.
Texto de eventos do calendário só aparece em DEBUG.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import ContextFieldsFilter
from config.logging.formatters import LOG_FIELDS, create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "ddd_calendar"

# Campos de contexto sempre presentes no JSON (vazios quando não definidos)
CONTEXT_FIELDS = ("correlation_id", "run_id")

# Loggers de bibliotecas muito verbosos em INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    context_getters: Mapping[str, Callable[[], str]] | None = None,
) -> None:
    """Configura o root logger com um único handler JSON em stderr.

    Args:
        level: Nível de log (case insensitive).
        service_name: Valor do campo `service`.
        context_getters: Campo -> getter do contexto atual. Campos de
            CONTEXT_FIELDS sem getter saem como string vazia.

    Raises:
        ValueError: Nível de log inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    getters: dict[str, Callable[[], str]] = {name: str for name in CONTEXT_FIELDS}
    getters.update(context_getters or {})
    extra_fields = tuple(name for name in getters if name not in LOG_FIELDS)

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter(LOG_FIELDS + extra_fields))
    handler.addFilter(ContextFieldsFilter(service_name, getters))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    quiet_level = max(logging.WARNING, logging.getLevelName(level_upper))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    """Atalho para logging.getLogger (o filter do handler injeta o contexto)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho degradado foi usado.

    No serviço de calendário: evento repassado sem padronização, step com
    tentativas esgotadas ou montagem best-effort com eventos fora do cache.

    Args:
        logger: Logger do módulo que acionou o fallback.
        component: Ex.: "event_standardizer", "calendar_pipeline".
        reason: Ex.: "empty_response", "step_retry_exhausted".
        elapsed_ms: Tempo decorrido até o fallback, quando aplicável.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info("fallback_applied", extra=extra)
