"""Padronização de um evento via serviço externo, com cache por conteúdo.

Fluxo por evento (estados finais: padronizado ou repassado):
1. Chave canônica do evento de entrada.
2. Sem force_reprocess, consulta o cache; hit encerra sem chamada externa.
3. Miss: monta o turno do usuário e chama o serviço de padronização.
4. Resposta vazia ou ilegível: evento repassado sem alteração, nada é cacheado.
5. Resposta útil: sobrepõe SUMMARY/DESCRIPTION (ou o VEVENT devolvido no modo
   ics) às propriedades originais e acrescenta o rodapé de procedência.
6. Normaliza datas, grava no cache e devolve.

O evento recebido nunca é alterado.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

from ai.config.settings import PayloadMode
from ai.prompts import format_event_user_text
from ai.utils import split_summary_description, strip_code_fence
from api.codecs.ics import parse, serialize
from app.domain.calendar_object import CalendarObject
from app.observability import record_latency
from app.protocols.text_standardizer import TextStandardizerProtocol
from app.services.event_canonicalizer import (
    EVENT_TAG,
    canonical_key,
    is_canonical_property,
    minimal_event,
)
from app.services.event_dates import (
    DEFAULT_EVENT_HOURS,
    REMOTE_MEETING_HOURS,
    REMOTE_MEETING_LOCATION,
    apply_date_rules,
)
from app.services.standard_event_cache import StandardEventCache
from config.logging import log_fallback
from utils.errors import FormatError

logger = logging.getLogger(__name__)

_COMPONENT = "event_standardizer"


class StandardizationOutcome(Enum):
    """Como o evento final foi obtido."""

    CACHED = "cached"
    COMPUTED = "computed"
    PASSED_THROUGH = "passed_through"


@dataclass(frozen=True, slots=True)
class StandardizedEvent:
    """Resultado da padronização de um evento.

    Atributos:
        event: Evento final (padronizado ou o original)
        outcome: Origem do resultado
        key: Chave canônica do evento de entrada
    """

    event: CalendarObject
    outcome: StandardizationOutcome
    key: str


def provenance_footer(original: CalendarObject) -> str:
    """Rodapé com o resumo e a descrição originais."""
    summary = original.text("SUMMARY") or ""
    description = original.text("DESCRIPTION") or ""
    return f"\n\nSummary: {summary}\nDescription: {description}"


class EventStandardizer:
    """Padroniza eventos VEVENT usando cache + serviço externo.

    Args:
        cache: Cache de eventos padronizados
        text_standardizer: Serviço externo de padronização
        payload_mode: Formato da conversa (summary ou ics)
        remote_location: LOCATION de reuniões remotas (regra de duração zero)
        remote_hours: Duração de reuniões remotas
        default_hours: Duração dos demais eventos
    """

    def __init__(
        self,
        cache: StandardEventCache,
        text_standardizer: TextStandardizerProtocol,
        payload_mode: PayloadMode = PayloadMode.SUMMARY,
        *,
        remote_location: str = REMOTE_MEETING_LOCATION,
        remote_hours: int = REMOTE_MEETING_HOURS,
        default_hours: int = DEFAULT_EVENT_HOURS,
    ) -> None:
        self._cache = cache
        self._text_standardizer = text_standardizer
        self._payload_mode = payload_mode
        self._remote_location = remote_location
        self._remote_hours = remote_hours
        self._default_hours = default_hours

    @property
    def payload_mode(self) -> PayloadMode:
        return self._payload_mode

    async def standardize(
        self,
        event: CalendarObject,
        *,
        force_reprocess: bool = False,
    ) -> StandardizedEvent:
        """Padroniza um evento.

        Raises:
            TextStandardizationError: Falha transitória do serviço externo
                (o chamador decide se repete).
        """
        start = time.perf_counter()
        key = canonical_key(event)
        key_masked = key[:8] + "..."

        if not force_reprocess:
            cached = await self._cache.get(key)
            if cached is not None:
                logger.debug("standard_event_cache_hit", extra={"key": key_masked})
                return StandardizedEvent(cached, StandardizationOutcome.CACHED, key)

        reply = await self._text_standardizer.standardize(self.user_text(event))
        elapsed_ms = (time.perf_counter() - start) * 1000

        if reply is None or not reply.strip():
            return self._pass_through(event, key, "empty_response", elapsed_ms)

        merged = self._merge(event, reply)
        if merged is None:
            return self._pass_through(event, key, "unparseable_response", elapsed_ms)

        standardized = apply_date_rules(
            merged,
            remote_location=self._remote_location,
            remote_hours=self._remote_hours,
            default_hours=self._default_hours,
        )
        await self._cache.put(key, standardized)
        # Evento já padronizado é ponto fixo: reprocessá-lo devolve ele mesmo.
        output_key = canonical_key(standardized)
        if output_key != key:
            await self._cache.put(output_key, standardized)

        record_latency(_COMPONENT, "standardize", (time.perf_counter() - start) * 1000)
        logger.info(
            "event_standardized",
            extra={"key": key_masked, "payload_mode": self._payload_mode.value},
        )
        return StandardizedEvent(standardized, StandardizationOutcome.COMPUTED, key)

    def user_text(self, event: CalendarObject) -> str:
        """Turno do usuário conforme o modo de payload."""
        if self._payload_mode is PayloadMode.ICS:
            return serialize(minimal_event(event))
        return format_event_user_text(
            event.text("SUMMARY") or "",
            event.text("DESCRIPTION") or "",
        )

    def _merge(self, event: CalendarObject, reply: str) -> CalendarObject | None:
        if self._payload_mode is PayloadMode.ICS:
            overrides = self._overrides_from_event_block(reply)
        else:
            overrides = self._overrides_from_summary_text(reply)
        if overrides is None:
            return None

        description = overrides.get("DESCRIPTION", event.text("DESCRIPTION") or "")
        overrides["DESCRIPTION"] = description + provenance_footer(event)
        return event.with_properties(overrides)

    @staticmethod
    def _overrides_from_summary_text(reply: str) -> dict[str, str] | None:
        summary, description = split_summary_description(strip_code_fence(reply))
        if not summary:
            return None
        return {"SUMMARY": summary, "DESCRIPTION": description}

    @staticmethod
    def _overrides_from_event_block(reply: str) -> dict[str, str] | None:
        # A resposta já vem no formato de linha: o parser decodifica uma única vez.
        try:
            block = parse(strip_code_fence(reply), root_tag=EVENT_TAG)
        except FormatError as exc:
            logger.warning(
                "standardizer_reply_invalid",
                extra={"error": str(exc), "line_number": exc.line_number},
            )
            return None
        overrides = {
            name: value
            for name, value in block.text_properties().items()
            if is_canonical_property(name)
        }
        return overrides or None

    @staticmethod
    def _pass_through(
        event: CalendarObject,
        key: str,
        reason: str,
        elapsed_ms: float,
    ) -> StandardizedEvent:
        log_fallback(logger, _COMPONENT, reason=reason, elapsed_ms=round(elapsed_ms, 2))
        return StandardizedEvent(event, StandardizationOutcome.PASSED_THROUGH, key)
