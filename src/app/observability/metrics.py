"""Métricas do feed registradas como logs estruturados.

Cada métrica é uma linha JSON `metric_<tipo>` com `metric_type` no payload,
pronta para agregação externa. correlation_id e run_id entram pelo filtro de
contexto do logging; quem registra não precisa repassá-los.

Uso:
    with measure_latency("calendar_pipeline", "standardize_all"):
        ...

    record_cache_lookup("standard_event_cache", hits=3, misses=1)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)


def _emit(metric_type: str, **fields: Any) -> None:
    logger.info(f"metric_{metric_type}", extra={"metric_type": metric_type, **fields})


def record_latency(component: str, operation: str, latency_ms: float) -> None:
    """Registra latência de uma operação concluída.

    Args:
        component: Componente (ex: "event_standardizer", "calendar_pipeline")
        operation: Operação (ex: "standardize", "assemble_best_effort")
        latency_ms: Latência em milissegundos
    """
    _emit("latency", component=component, operation=operation, latency_ms=round(latency_ms, 2))


@contextmanager
def measure_latency(component: str, operation: str) -> Iterator[None]:
    """Mede o bloco e registra a latência se ele terminar sem exceção."""
    started_at = time.perf_counter()
    yield
    record_latency(component, operation, (time.perf_counter() - started_at) * 1000)


def record_cache_lookup(component: str, hits: int, misses: int) -> None:
    """Registra uma consulta em lote ao cache de eventos."""
    total = hits + misses
    _emit(
        "cache_lookup",
        component=component,
        hits=hits,
        misses=misses,
        hit_ratio=round(hits / total, 3) if total else None,
    )


def record_token_usage(
    component: str,
    operation: str,
    prompt_tokens: int,
    completion_tokens: int,
    total_tokens: int,
) -> None:
    """Registra tokens consumidos por uma chamada ao serviço de padronização."""
    _emit(
        "token_usage",
        component=component,
        operation=operation,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=total_tokens,
    )
