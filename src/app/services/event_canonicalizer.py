"""Identidade canônica de eventos para o cache de padronização.

Dois eventos com mesmos horários, SUMMARY, DESCRIPTION e LOCATION têm a mesma
chave, independente de UID, SEQUENCE, DTSTAMP ou campos X-*.
"""

from __future__ import annotations

import base64
import hashlib

from api.codecs.ics import serialize
from app.domain.calendar_object import CalendarObject

EVENT_TAG = "VEVENT"
CANONICAL_PREFIXES = ("DTSTART", "DTEND")
CANONICAL_NAMES = frozenset({"SUMMARY", "DESCRIPTION", "LOCATION"})


def is_canonical_property(name: str) -> bool:
    """True para DTSTART*/DTEND* (com ou sem parâmetros) e textos exibidos."""
    return name.startswith(CANONICAL_PREFIXES) or name in CANONICAL_NAMES


def minimal_event(event: CalendarObject) -> CalendarObject:
    """Reduz o evento ao subconjunto que define sua identidade de cache."""
    return CalendarObject(
        type=EVENT_TAG,
        properties={
            name: value
            for name, value in event.text_properties().items()
            if is_canonical_property(name)
        },
    )


def canonical_key(event: CalendarObject) -> str:
    """SHA-256 (base64) da serialização determinística do evento mínimo."""
    text = serialize(minimal_event(event))
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")
