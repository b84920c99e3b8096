"""Observabilidade: contexto de rastreamento e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import measure_latency, record_cache_lookup, record_token_usage
"""

from app.observability.correlation import (
    bind_run_id,
    get_correlation_id,
    get_run_id,
    reset_correlation_id,
    reset_run_id,
    set_correlation_id,
)
from app.observability.metrics import (
    measure_latency,
    record_cache_lookup,
    record_latency,
    record_token_usage,
)

__all__ = [
    "bind_run_id",
    "get_correlation_id",
    "get_run_id",
    "measure_latency",
    "record_cache_lookup",
    "record_latency",
    "record_token_usage",
    "reset_correlation_id",
    "reset_run_id",
    "set_correlation_id",
]
