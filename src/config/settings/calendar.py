"""Settings do feed de calendário e do pipeline de padronização.

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pela aplicacao e reduz risco de divergencia entre servicos.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

StepBackoff = Literal["constant", "linear", "exponential"]


class CalendarSettings(BaseModel):
    """Configuracoes do feed servido e dos steps por evento."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    feed_url: str = Field(
        default="",
        description="URL do feed iCalendar de origem.",
    )
    feed_name: str = Field(
        default="DDD",
        min_length=1,
        description="NAME do calendario servido.",
    )
    product_id: str = Field(
        default="ddd/0.1.0",
        min_length=1,
        description="PRODID do calendario servido.",
    )
    remote_meeting_location: str = Field(
        default="Zoom",
        description="LOCATION que identifica reuniao remota.",
    )
    remote_meeting_hours: int = Field(
        default=1,
        ge=1,
        le=24,
        description="Duracao aplicada a reunioes remotas de duracao zero.",
    )
    default_event_hours: int = Field(
        default=4,
        ge=1,
        le=24,
        description="Duracao aplicada aos demais eventos de duracao zero.",
    )
    step_retry_limit: int = Field(
        default=3,
        ge=0,
        description="Tentativas extras por evento apos a primeira.",
    )
    step_retry_delay_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Atraso base entre tentativas de um evento.",
    )
    step_backoff: StepBackoff = Field(
        default="constant",
        description="Politica de backoff entre tentativas.",
    )
    step_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por tentativa de um evento.",
    )
    max_concurrent_runs: int = Field(
        default=4,
        ge=1,
        description="Execucoes do pipeline simultaneas.",
    )

    def validate_for(self, *, strict: bool) -> list[str]:
        """Erros de configuracao que impedem servir o feed."""
        errors: list[str] = []
        if strict and not self.feed_url:
            errors.append("CALENDAR_FEED_URL nao configurada")
        return errors


def _parse_backoff(value: str) -> StepBackoff:
    normalized = value.strip().lower()
    if normalized == "linear":
        return "linear"
    if normalized == "exponential":
        return "exponential"
    return "constant"


def _load_calendar_from_env() -> CalendarSettings:
    """Carrega CalendarSettings a partir de variaveis de ambiente."""
    return CalendarSettings(
        feed_url=os.getenv("CALENDAR_FEED_URL", "").strip(),
        feed_name=os.getenv("CALENDAR_FEED_NAME", "DDD"),
        product_id=os.getenv("CALENDAR_PRODUCT_ID", "ddd/0.1.0"),
        remote_meeting_location=os.getenv("CALENDAR_REMOTE_MEETING_LOCATION", "Zoom"),
        remote_meeting_hours=int(os.getenv("CALENDAR_REMOTE_MEETING_HOURS", "1")),
        default_event_hours=int(os.getenv("CALENDAR_DEFAULT_EVENT_HOURS", "4")),
        step_retry_limit=int(os.getenv("CALENDAR_STEP_RETRY_LIMIT", "3")),
        step_retry_delay_seconds=float(os.getenv("CALENDAR_STEP_RETRY_DELAY_SECONDS", "60")),
        step_backoff=_parse_backoff(os.getenv("CALENDAR_STEP_BACKOFF", "constant")),
        step_timeout_seconds=float(os.getenv("CALENDAR_STEP_TIMEOUT_SECONDS", "60")),
        max_concurrent_runs=int(os.getenv("CALENDAR_MAX_CONCURRENT_RUNS", "4")),
    )


@lru_cache(maxsize=1)
def get_calendar_settings() -> CalendarSettings:
    """Retorna instancia cacheada de CalendarSettings."""
    return _load_calendar_from_env()


__all__ = ["CalendarSettings", "StepBackoff", "get_calendar_settings"]
