"""Modelo de dominio para blocos iCalendar (VCALENDAR, VEVENT, VTIMEZONE...).

Cada propriedade aponta para um texto ja decodificado ou para a lista de
blocos filhos de uma mesma tag. Nunca os dois para o mesmo nome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

PropertyValue = Union[str, list["CalendarObject"]]


@dataclass
class CalendarObject:
    """No da arvore iCalendar.

    Attributes:
        type: Tag do bloco (ex.: "VCALENDAR", "VEVENT"), preservando caixa.
        properties: Nome da propriedade -> texto, ou tag -> lista de filhos.
    """

    type: str
    properties: dict[str, PropertyValue] = field(default_factory=dict)

    def text(self, name: str) -> str | None:
        """Retorna o valor textual da propriedade ou None."""
        value = self.properties.get(name)
        return value if isinstance(value, str) else None

    def children(self, tag: str) -> list[CalendarObject]:
        """Retorna os blocos filhos da tag (lista vazia se ausente)."""
        value = self.properties.get(tag)
        return value if isinstance(value, list) else []

    def text_properties(self) -> dict[str, str]:
        """Apenas as propriedades textuais do bloco."""
        return {k: v for k, v in self.properties.items() if isinstance(v, str)}

    def with_properties(self, overrides: dict[str, PropertyValue]) -> CalendarObject:
        """Copia rasa com propriedades sobrescritas; o original nao e alterado."""
        return CalendarObject(type=self.type, properties={**self.properties, **overrides})

    def copy(self) -> CalendarObject:
        """Copia rasa do mapa de propriedades."""
        return CalendarObject(type=self.type, properties=dict(self.properties))
