"""Casos de uso dos endpoints do feed (original, padronizado, legado)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from app.services.legacy_cleanup import convert_legacy
from app.workflows.calendar_runs import RunParams, RunState, run_id_for

if TYPE_CHECKING:
    from app.infra.calendar.feed_client import CalendarFeedClient
    from app.use_cases.calendar.standardize_calendar import CalendarPipeline
    from app.workflows.calendar_runs import CalendarRunRegistry

logger = logging.getLogger(__name__)


class FeedSource(Enum):
    """Origem do calendário servido."""

    RUN_OUTPUT = "run_output"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True, slots=True)
class StandardizedFeed:
    """Calendário servido pelo endpoint padronizado."""

    calendar_text: str
    source: FeedSource
    run_id: str
    run_state: RunState


@dataclass(frozen=True, slots=True)
class LegacyRuleSettings:
    """Parâmetros das regras de data do feed legado."""

    remote_location: str = "Zoom"
    remote_hours: int = 1
    default_hours: int = 4


class ServeFeedUseCase:
    """Busca o feed de origem e produz cada variante servida.

    Args:
        feed_client: Cliente do feed de origem
        pipeline: Pipeline de padronização
        runs: Registro de execuções do pipeline
        legacy_rules: Parâmetros de data do feed legado
    """

    def __init__(
        self,
        *,
        feed_client: CalendarFeedClient,
        pipeline: CalendarPipeline,
        runs: CalendarRunRegistry,
        legacy_rules: LegacyRuleSettings | None = None,
    ) -> None:
        self._feed_client = feed_client
        self._pipeline = pipeline
        self._runs = runs
        self._legacy_rules = legacy_rules or LegacyRuleSettings()

    async def original(self) -> str:
        """Feed de origem sem alterações."""
        return await self._feed_client.fetch_original()

    async def standardized(self, retry: str | None = None) -> StandardizedFeed:
        """Saída da execução concluída, ou montagem best-effort enquanto roda.

        `retry` presente gera uma execução nova que ignora o cache.

        Raises:
            FeedUnavailableError: Feed de origem indisponível.
            FormatError: Feed de origem malformado.
        """
        calendar_text = await self._feed_client.fetch_original()
        run_id = run_id_for(calendar_text, retry)

        status = self._runs.status(run_id)
        if status is not None and status.state is RunState.COMPLETE and status.output is not None:
            return StandardizedFeed(status.output, FeedSource.RUN_OUTPUT, run_id, status.state)

        # Valida a entrada antes de agendar: FormatError não vira execução com erro.
        best_effort = await self._pipeline.assemble_best_effort(calendar_text)
        run = self._runs.get_or_create(
            run_id,
            RunParams(calendar_text=calendar_text, force_reprocess=retry is not None),
        )
        logger.info(
            "standardized_feed_best_effort",
            extra={
                "run_id": run_id[:12],
                "run_state": run.state.value,
                "total_events": best_effort.total_events,
                "cached_events": best_effort.cached_events,
            },
        )
        return StandardizedFeed(
            best_effort.calendar_text, FeedSource.BEST_EFFORT, run_id, run.state
        )

    async def legacy(self) -> str:
        """Feed limpo pelas regras determinísticas.

        Raises:
            FeedUnavailableError: Feed de origem indisponível.
            FormatError: Feed de origem malformado.
        """
        calendar_text = await self._feed_client.fetch_original()
        identity = self._pipeline.identity
        return convert_legacy(
            calendar_text,
            feed_name=identity.name,
            product_id=identity.product_id,
            remote_location=self._legacy_rules.remote_location,
            remote_hours=self._legacy_rules.remote_hours,
            default_hours=self._legacy_rules.default_hours,
        )
