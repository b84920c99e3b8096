"""Pipeline do calendário padronizado.

- standardize_all: padroniza cada VEVENT num step com tentativas e timeout,
  preservando a ordem original. Falha de um evento vira repasse só dele.
- assemble_best_effort: enquanto a execução não termina, serve o que já está
  no cache (uma consulta em lote) e o original para o resto. Nunca chama o
  serviço externo.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from api.codecs.ics import parse, serialize
from app.observability import measure_latency
from app.services.calendar_assembly import (
    DEFAULT_FEED_NAME,
    DEFAULT_PRODUCT_ID,
    assemble_calendar,
    extract_events,
)
from app.services.event_canonicalizer import canonical_key
from app.workflows.steps import StepOptions, WorkflowStepRunner
from config.logging import log_fallback
from utils.errors import StepRetryExhaustedError

if TYPE_CHECKING:
    from app.domain.calendar_object import CalendarObject
    from app.services.event_standardizer import EventStandardizer
    from app.services.standard_event_cache import StandardEventCache
    from app.workflows.calendar_runs import RunParams

logger = logging.getLogger(__name__)

_COMPONENT = "calendar_pipeline"


def step_name_for(index: int) -> str:
    """Nome estável do step do evento na posição `index`."""
    return f"standardize VEVENT #{index}"


@dataclass(frozen=True, slots=True)
class FeedIdentity:
    """Identidade fixa do feed servido."""

    name: str = DEFAULT_FEED_NAME
    product_id: str = DEFAULT_PRODUCT_ID


@dataclass(frozen=True, slots=True)
class BestEffortResult:
    """Calendário parcial e contagem de substituições."""

    calendar_text: str
    total_events: int
    cached_events: int


@dataclass(slots=True)
class CalendarPipeline:
    """Orquestra padronização e montagem do calendário.

    Atributos:
        standardizer: Padronizador de eventos
        cache: Cache de eventos padronizados (montagem best-effort)
        step_options: Tentativas/atraso/backoff/timeout por evento
        identity: NAME e PRODID do feed de saída
    """

    standardizer: EventStandardizer
    cache: StandardEventCache
    step_options: StepOptions = field(default_factory=StepOptions)
    identity: FeedIdentity = field(default_factory=FeedIdentity)

    async def standardize_all(
        self,
        calendar_text: str,
        force_reprocess: bool = False,
        steps: WorkflowStepRunner | None = None,
    ) -> str:
        """Padroniza todos os eventos e devolve o calendário serializado.

        Raises:
            FormatError: Calendário de entrada malformado (nenhuma saída parcial).
        """
        calendar = parse(calendar_text)
        runner = steps or WorkflowStepRunner()

        with measure_latency(_COMPONENT, "standardize_all"):
            events: list[CalendarObject] = []
            for index, original in enumerate(extract_events(calendar)):
                events.append(
                    await self._standardize_step(runner, index, original, force_reprocess)
                )
            return serialize(self._assemble(calendar, events))

    async def execute_run(self, params: RunParams, steps: WorkflowStepRunner) -> str:
        """Executor usado pelo registro de execuções."""
        return await self.standardize_all(
            params.calendar_text,
            force_reprocess=params.force_reprocess,
            steps=steps,
        )

    async def _standardize_step(
        self,
        runner: WorkflowStepRunner,
        index: int,
        original: CalendarObject,
        force_reprocess: bool,
    ) -> CalendarObject:
        async def body() -> CalendarObject:
            result = await self.standardizer.standardize(
                original, force_reprocess=force_reprocess
            )
            return result.event

        try:
            return await runner.run_step(step_name_for(index), self.step_options, body)
        except StepRetryExhaustedError as exc:
            log_fallback(logger, _COMPONENT, reason="step_retry_exhausted")
            logger.warning(
                "event_passed_through",
                extra={
                    "step": exc.step_name,
                    "attempts": exc.attempts,
                    "error_type": type(exc.last_error).__name__,
                },
            )
            return original

    async def assemble_best_effort(self, calendar_text: str) -> BestEffortResult:
        """Monta o calendário com o que houver no cache, sem chamada externa.

        Raises:
            FormatError: Calendário de entrada malformado.
        """
        start = time.perf_counter()
        calendar = parse(calendar_text)
        originals = extract_events(calendar)
        cached = await self.cache.get_many([canonical_key(event) for event in originals])

        events = [
            standard if standard is not None else original
            for original, standard in zip(originals, cached)
        ]
        hits = sum(1 for standard in cached if standard is not None)
        elapsed_ms = (time.perf_counter() - start) * 1000
        if hits < len(originals):
            log_fallback(logger, _COMPONENT, reason="best_effort_assembly", elapsed_ms=elapsed_ms)

        return BestEffortResult(
            calendar_text=serialize(self._assemble(calendar, events)),
            total_events=len(originals),
            cached_events=hits,
        )

    def _assemble(self, calendar: CalendarObject, events: list[CalendarObject]) -> CalendarObject:
        return assemble_calendar(
            calendar,
            events,
            feed_name=self.identity.name,
            product_id=self.identity.product_id,
        )
