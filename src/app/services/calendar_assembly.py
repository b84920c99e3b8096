"""Montagem do calendário servido.

Preserva o contexto do calendário de entrada (VERSION, CALSCALE, VTIMEZONE,
X-WR-*), sobrescreve a identidade do feed (NAME, PRODID) e substitui a lista
de VEVENT pelos eventos processados, na ordem recebida.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.calendar_object import CalendarObject
from app.services.event_canonicalizer import EVENT_TAG

DEFAULT_FEED_NAME = "DDD"
DEFAULT_PRODUCT_ID = "ddd/0.1.0"


def extract_events(calendar: CalendarObject) -> list[CalendarObject]:
    """Eventos do calendário, na ordem do documento."""
    return list(calendar.children(EVENT_TAG))


def assemble_calendar(
    calendar: CalendarObject,
    events: Iterable[CalendarObject],
    *,
    feed_name: str = DEFAULT_FEED_NAME,
    product_id: str = DEFAULT_PRODUCT_ID,
) -> CalendarObject:
    """Novo calendário com identidade fixa e os eventos informados."""
    return calendar.with_properties(
        {
            "NAME": feed_name,
            "PRODID": product_id,
            EVENT_TAG: list(events),
        }
    )
