"""Endpoints do feed iCalendar.

- /original.ics: feed de origem sem alterações
- /group3.ics: feed padronizado (execução concluída ou montagem best-effort)
- /group3-legacy.ics: feed limpo por regras determinísticas

`?mime=plain` troca o content-type para text/plain (útil no navegador).
`?retry=<qualquer>` no feed padronizado força nova execução sem cache.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse, Response

from app.observability import reset_correlation_id, set_correlation_id
from utils.errors import FeedUnavailableError, FormatError

if TYPE_CHECKING:
    from app.use_cases.calendar.serve_feed import ServeFeedUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

CALENDAR_MEDIA_TYPE = "text/calendar"
PLAIN_MEDIA_TYPE = "text/plain"


def media_type_for(mime: str | None) -> str:
    """text/plain quando mime=plain; text/calendar caso contrário."""
    return PLAIN_MEDIA_TYPE if mime == "plain" else CALENDAR_MEDIA_TYPE


def _feed_use_case(request: Request) -> ServeFeedUseCase:
    return request.app.state.calendar_services.feed


async def _respond(
    request: Request,
    endpoint: str,
    mime: str | None,
    produce: Callable[[], Awaitable[tuple[str, dict[str, str]]]],
) -> Response:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        body, headers = await produce()
    except FeedUnavailableError as exc:
        logger.warning(
            "calendar_feed_unavailable",
            extra={"endpoint": endpoint, "error": str(exc)},
        )
        return PlainTextResponse("Feed de origem indisponível", status_code=502)
    except FormatError as exc:
        logger.warning(
            "calendar_feed_malformed",
            extra={"endpoint": endpoint, "error": str(exc), "line_number": exc.line_number},
        )
        return PlainTextResponse("Feed de origem malformado", status_code=502)
    finally:
        reset_correlation_id(token)
    return Response(content=body, media_type=media_type_for(mime), headers=headers)


@router.get("/original.ics")
async def original_feed(request: Request, mime: str | None = Query(default=None)) -> Response:
    """Feed de origem sem alterações."""

    async def produce() -> tuple[str, dict[str, str]]:
        return await _feed_use_case(request).original(), {}

    return await _respond(request, "original", mime, produce)


@router.get("/group3.ics")
async def standardized_feed(
    request: Request,
    mime: str | None = Query(default=None),
    retry: str | None = Query(default=None),
) -> Response:
    """Feed padronizado; nunca bloqueia na execução do pipeline."""

    async def produce() -> tuple[str, dict[str, str]]:
        feed = await _feed_use_case(request).standardized(retry=retry)
        headers = {
            "x-calendar-source": feed.source.value,
            "x-calendar-run-state": feed.run_state.value,
        }
        return feed.calendar_text, headers

    return await _respond(request, "standardized", mime, produce)


@router.get("/group3-legacy.ics")
async def legacy_feed(request: Request, mime: str | None = Query(default=None)) -> Response:
    """Feed limpo pelas regras legadas (sem serviço externo)."""

    async def produce() -> tuple[str, dict[str, str]]:
        return await _feed_use_case(request).legacy(), {}

    return await _respond(request, "legacy", mime, produce)
