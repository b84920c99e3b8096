"""Regras de normalização de datas de eventos.

- Meia-noite: DTSTART terminando em T000000 vira evento de dia inteiro
  (só a data) e o DTEND é removido.
- Duração zero: DTSTART;TZID=X igual a DTEND;TZID=X estende o fim a partir do
  início (1h para reunião remota, 4h nos demais casos).

As funções nunca alteram o evento recebido; devolvem uma cópia.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from app.domain.calendar_object import CalendarObject

logger = logging.getLogger(__name__)

ICS_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
MIDNIGHT_SUFFIX = "T000000"

REMOTE_MEETING_LOCATION = "Zoom"
REMOTE_MEETING_HOURS = 1
DEFAULT_EVENT_HOURS = 4

_START = "DTSTART"
_END = "DTEND"
_LOCAL_START_PREFIX = "DTSTART;TZID="


def _shift(value: str, hours: int) -> str | None:
    try:
        start = datetime.strptime(value, ICS_DATETIME_FORMAT)
    except ValueError:
        return None
    return (start + timedelta(hours=hours)).strftime(ICS_DATETIME_FORMAT)


def apply_date_rules(
    event: CalendarObject,
    *,
    remote_location: str = REMOTE_MEETING_LOCATION,
    remote_hours: int = REMOTE_MEETING_HOURS,
    default_hours: int = DEFAULT_EVENT_HOURS,
) -> CalendarObject:
    """Aplica as regras de meia-noite e duração zero.

    Args:
        event: Evento VEVENT (não é modificado)
        remote_location: LOCATION que identifica reunião remota
        remote_hours: Duração aplicada a reuniões remotas
        default_hours: Duração aplicada aos demais eventos

    Returns:
        Novo CalendarObject com as datas normalizadas.
    """
    properties = dict(event.properties)

    start = properties.get(_START)
    if isinstance(start, str) and start.endswith(MIDNIGHT_SUFFIX):
        properties[_START] = start.split("T", 1)[0]
        properties.pop(_END, None)
        return CalendarObject(type=event.type, properties=properties)

    hours = remote_hours if properties.get("LOCATION") == remote_location else default_hours
    for name, value in event.properties.items():
        if not name.startswith(_LOCAL_START_PREFIX) or not isinstance(value, str):
            continue
        end_name = _END + name[len(_START) :]
        if properties.get(end_name) != value:
            continue
        shifted = _shift(value, hours)
        if shifted is None:
            logger.debug("event_date_unparseable", extra={"property": name})
            continue
        properties[end_name] = shifted

    return CalendarObject(type=event.type, properties=properties)
