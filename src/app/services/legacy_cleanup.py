"""Limpeza determinística do feed (sem serviço externo).

Regras por evento:
- normalização de datas (meia-noite e duração zero)
- SUMMARY sem o sufixo "see notes"
- DESCRIPTION só com as instruções do grupo 3 e sem "(Arrival Time: ...)"
"""

from __future__ import annotations

import logging

from ai.rules import clean_description, clean_summary
from api.codecs.ics import parse, serialize
from app.domain.calendar_object import CalendarObject
from app.services.calendar_assembly import (
    DEFAULT_FEED_NAME,
    DEFAULT_PRODUCT_ID,
    assemble_calendar,
    extract_events,
)
from app.services.event_dates import (
    DEFAULT_EVENT_HOURS,
    REMOTE_MEETING_HOURS,
    REMOTE_MEETING_LOCATION,
    apply_date_rules,
)

logger = logging.getLogger(__name__)


def clean_event(
    event: CalendarObject,
    *,
    remote_location: str = REMOTE_MEETING_LOCATION,
    remote_hours: int = REMOTE_MEETING_HOURS,
    default_hours: int = DEFAULT_EVENT_HOURS,
) -> CalendarObject:
    """Aplica as regras legadas a um evento; o original não é alterado."""
    cleaned = apply_date_rules(
        event,
        remote_location=remote_location,
        remote_hours=remote_hours,
        default_hours=default_hours,
    )
    overrides: dict[str, str] = {}
    summary = cleaned.text("SUMMARY")
    if summary is not None:
        overrides["SUMMARY"] = clean_summary(summary)
    description = cleaned.text("DESCRIPTION")
    if description is not None:
        overrides["DESCRIPTION"] = clean_description(description)
    return cleaned.with_properties(overrides)


def convert_legacy(
    calendar_text: str,
    *,
    feed_name: str = DEFAULT_FEED_NAME,
    product_id: str = DEFAULT_PRODUCT_ID,
    remote_location: str = REMOTE_MEETING_LOCATION,
    remote_hours: int = REMOTE_MEETING_HOURS,
    default_hours: int = DEFAULT_EVENT_HOURS,
) -> str:
    """Converte o feed completo pelas regras legadas.

    Raises:
        FormatError: Calendário de entrada malformado.
    """
    calendar = parse(calendar_text)
    events = [
        clean_event(
            event,
            remote_location=remote_location,
            remote_hours=remote_hours,
            default_hours=default_hours,
        )
        for event in extract_events(calendar)
    ]
    logger.info("legacy_cleanup_completed", extra={"events": len(events)})
    return serialize(
        assemble_calendar(calendar, events, feed_name=feed_name, product_id=product_id)
    )
