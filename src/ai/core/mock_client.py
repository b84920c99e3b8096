"""Padronizador mock para testes e desenvolvimento.

Retorna texto determinístico sem chamar LLM real, aplicando as regras de
limpeza legadas ao turno do usuário.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ai.config.settings import PayloadMode
from ai.rules import clean_description, clean_summary
from api.codecs.ics import parse, serialize
from app.protocols.text_standardizer import TextStandardizerProtocol

if TYPE_CHECKING:
    from ai.config.settings import AISettings


class MockTextStandardizer(TextStandardizerProtocol):
    """Padronizador mock.

    Modo summary: recebe "SUMMARY\\nDESCRIPTION" e devolve no mesmo formato.
    Modo ics: recebe um VEVENT serializado e devolve outro VEVENT.
    """

    def __init__(self, settings: AISettings | None = None) -> None:
        """Inicializa padronizador mock."""
        from ai.config.settings import get_ai_settings

        self._settings = settings or get_ai_settings()
        self.calls: list[str] = []

    async def standardize(self, user_text: str) -> str | None:
        """Aplica as regras legadas ao texto recebido."""
        self.calls.append(user_text)
        if self._settings.payload_mode is PayloadMode.ICS:
            event = parse(user_text, root_tag="VEVENT")
            overrides = {}
            summary = event.text("SUMMARY")
            if summary is not None:
                overrides["SUMMARY"] = clean_summary(summary)
            description = event.text("DESCRIPTION")
            if description is not None:
                overrides["DESCRIPTION"] = clean_description(description)
            return serialize(event.with_properties(overrides))

        summary, _, description = user_text.partition("\n")
        return f"{clean_summary(summary)}\n{clean_description(description)}"
