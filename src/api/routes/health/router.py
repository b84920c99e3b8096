"""Endpoints de health check (liveness e readiness) do feed."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_LABEL = "ddd-calendar"
STORE_PING_TIMEOUT_SECONDS = 2.0
OPENAI_CHECK_TIMEOUT_SECONDS = 5.0


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "0.1.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "latency_ms": self.latency_ms, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: o processo responde."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_LABEL,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: store de eventos (crítico) e OpenAI (degradável).

    Sem OpenAI o feed continua servido (repasse/best-effort), então só o
    store decide o status.
    """
    services = getattr(request.app.state, "calendar_services", None)
    store_check, openai_check = await asyncio.gather(
        _check_store(getattr(services, "store", None)),
        _check_openai(getattr(request.app.state, "openai_client", None)),
    )
    ready = store_check.status == "ok"

    payload: dict[str, Any] = {
        "status": "ready" if ready else "not_ready",
        "checks": {"store": store_check.as_dict(), "openai": openai_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    runs = getattr(services, "runs", None)
    if runs is not None:
        payload["runs_tracked"] = len(runs)
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _timed(probe: Awaitable[Any], timeout: float) -> tuple[Any, float]:
    started_at = time.perf_counter()
    result = await asyncio.wait_for(probe, timeout=timeout)
    return result, round((time.perf_counter() - started_at) * 1000, 2)


async def _check_store(store: Any | None) -> DependencyCheck:
    if store is None:
        return DependencyCheck(status="failed", error="not_configured")
    try:
        alive, latency_ms = await _timed(store.ping(), STORE_PING_TIMEOUT_SECONDS)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    if not alive:
        return DependencyCheck(status="failed", error="ping_failed")
    return DependencyCheck(status="ok", latency_ms=latency_ms)


async def _check_openai(openai_client: Any | None) -> DependencyCheck:
    if openai_client is None:
        return DependencyCheck(status="degraded", error="not_configured")
    try:
        _, latency_ms = await _timed(openai_client.models.list(), OPENAI_CHECK_TIMEOUT_SECONDS)
    except TimeoutError:
        return DependencyCheck(status="degraded", error="timeout")
    except Exception as exc:
        logger.warning("readiness_openai_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="degraded", error=type(exc).__name__)
    return DependencyCheck(status="ok", latency_ms=latency_ms)
