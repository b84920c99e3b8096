"""Codec iCalendar (RFC 5545): parse, serialize e transformações de texto.

Uso:
    from api.codecs.ics import parse, serialize

    calendar = parse(raw_text)
    events = calendar.children("VEVENT")
    output = serialize(calendar)
"""

from api.codecs.ics.parser import DEFAULT_ROOT_TAG, parse
from api.codecs.ics.serializer import serialize, serialize_property
from api.codecs.ics.text import FOLD_WIDTH, LINE_SEPARATOR, escape, fold, unescape, unfold

__all__ = [
    "DEFAULT_ROOT_TAG",
    "FOLD_WIDTH",
    "LINE_SEPARATOR",
    "escape",
    "fold",
    "parse",
    "serialize",
    "serialize_property",
    "unescape",
    "unfold",
]
