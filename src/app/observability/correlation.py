"""Contexto de rastreamento injetado nos logs.

Dois identificadores, ambos em ContextVar (seguros entre tasks asyncio):
- correlation_id: uma requisição HTTP (header x-correlation-id ou UUID novo)
- run_id: a execução do pipeline em andamento (prefixo do hash do calendário)

Tasks criadas durante uma requisição herdam uma cópia do contexto, então a
execução agendada por /group3.ics carrega o correlation_id de quem a criou.

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_run_id: ContextVar[str] = ContextVar("run_id", default="")


def get_correlation_id() -> str:
    """correlation_id do contexto atual (string vazia se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera UUID v4 quando None ou vazio."""
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def get_run_id() -> str:
    """run_id da execução em andamento no contexto atual."""
    return _run_id.get()


def bind_run_id(run_id: str) -> Token[str]:
    """Associa os logs seguintes do contexto à execução `run_id`."""
    return _run_id.set(run_id)


def reset_run_id(token: Token[str]) -> None:
    _run_id.reset(token)
