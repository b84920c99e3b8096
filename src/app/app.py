"""Entrypoint da aplicação do feed de calendário.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import SERVICE_NAME, initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_async_redis_client
from app.bootstrap.dependencies import create_calendar_services
from config.logging import get_logger
from config.settings import get_openai_settings, get_standard_event_store_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicializa conexões (Redis, OpenAI) e serviços do feed

    Shutdown:
    - Aguarda execuções pendentes do pipeline
    - Fecha conexões gracefully
    """
    logger.info("app_starting", extra={"service": SERVICE_NAME})
    validate_runtime_settings()
    app.state.redis_client = None
    app.state.openai_client = None

    if get_standard_event_store_settings().backend == "redis":
        try:
            app.state.redis_client = create_async_redis_client()
        except ValueError as exc:
            logger.warning("redis_client_not_ready", extra={"error_type": type(exc).__name__})

    openai_settings = get_openai_settings()
    if openai_settings.enabled and openai_settings.api_key:
        from openai import AsyncOpenAI

        app.state.openai_client = AsyncOpenAI(api_key=openai_settings.api_key)

    app.state.calendar_services = create_calendar_services(app.state.redis_client)

    yield

    logger.info("app_shutting_down", extra={"service": SERVICE_NAME})
    await app.state.calendar_services.aclose(drain_timeout_seconds=SHUTDOWN_DRAIN_SECONDS)
    openai_client = getattr(app.state, "openai_client", None)
    if openai_client is not None:
        await openai_client.close()
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="DDD Calendar",
        description="Feed iCalendar padronizado do time de trail running",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": SERVICE_NAME})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_dev_server_starting")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
