"""Serializador iCalendar (somente leitura sobre a árvore).

Propriedades são emitidas em ordem ordinal de nome: textos primeiro, depois
blocos filhos. A saída é determinística, independente da ordem de construção,
o que mantém estável o hash canônico de eventos.
"""

from __future__ import annotations

from api.codecs.ics.text import LINE_SEPARATOR, escape, fold
from app.domain.calendar_object import CalendarObject


def serialize(obj: CalendarObject) -> str:
    """Converte a árvore em texto iCalendar com separador CRLF."""
    return "".join(_serialize_lines(obj))


def serialize_property(name: str, value: str) -> str:
    """Linha "NOME:valor" já escapada e dobrada (sem separador final)."""
    prefix = f"{name}:"
    return prefix + fold(escape(value), prefix_length=len(prefix))


def _serialize_lines(obj: CalendarObject) -> list[str]:
    lines = [f"BEGIN:{obj.type}{LINE_SEPARATOR}"]
    names = sorted(obj.properties)

    for name in names:
        value = obj.properties[name]
        if isinstance(value, str):
            lines.append(serialize_property(name, value) + LINE_SEPARATOR)

    for name in names:
        value = obj.properties[name]
        if isinstance(value, list):
            for child in value:
                lines.extend(_serialize_lines(child))

    lines.append(f"END:{obj.type}{LINE_SEPARATOR}")
    return lines
