"""Registro de execuções do pipeline por calendário submetido.

Execuções são identificadas pelo hash do texto completo do calendário
(mais o discriminador de retry, quando houver). Submissões idênticas
reutilizam a execução em andamento ou concluída; um retry explícito gera
outra execução, que ignora o cache.

Cada execução roda como asyncio.Task, limitada por semáforo. Execuções com
erro podem ser retomadas pelo mesmo id sem repetir steps já concluídos.
"""

from __future__ import annotations

import asyncio
import contextlib
import hashlib
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.observability import bind_run_id, reset_run_id
from app.workflows.steps import SleepFunc, WorkflowStepRunner

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_RUNS = 4
DEFAULT_MAX_TRACKED_RUNS = 256


class RunState(Enum):
    """Estado de uma execução."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class RunParams:
    """Parâmetros de uma execução."""

    calendar_text: str
    force_reprocess: bool = False


@dataclass(frozen=True, slots=True)
class RunStatus:
    """Fotografia do estado de uma execução."""

    state: RunState
    output: str | None = None
    error: str | None = None


RunExecutor = Callable[[RunParams, WorkflowStepRunner], Awaitable[str]]


def run_id_for(calendar_text: str, retry: str | None = None) -> str:
    """Id da execução: sha256 do texto, com sufixo `-<retry>` quando presente."""
    digest = hashlib.sha256(calendar_text.encode("utf-8")).hexdigest()
    return f"{digest}-{retry}" if retry is not None else digest


class CalendarRun:
    """Handle de uma execução."""

    __slots__ = ("error", "output", "params", "run_id", "state", "steps", "task")

    def __init__(self, run_id: str, params: RunParams, steps: WorkflowStepRunner) -> None:
        self.run_id = run_id
        self.params = params
        self.steps = steps
        self.state = RunState.PENDING
        self.output: str | None = None
        self.error: str | None = None
        self.task: asyncio.Task[None] | None = None

    def status(self) -> RunStatus:
        return RunStatus(state=self.state, output=self.output, error=self.error)


class CalendarRunRegistry:
    """get_or_create/status sobre execuções do pipeline.

    Args:
        executor: Corrotina que executa o pipeline para (params, steps)
        max_concurrent_runs: Execuções simultâneas
        max_tracked_runs: Execuções finalizadas mantidas em memória
        sleep: Espera entre tentativas dos steps (injetável em testes)
    """

    def __init__(
        self,
        executor: RunExecutor,
        *,
        max_concurrent_runs: int = DEFAULT_MAX_CONCURRENT_RUNS,
        max_tracked_runs: int = DEFAULT_MAX_TRACKED_RUNS,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._executor = executor
        self._semaphore = asyncio.Semaphore(max_concurrent_runs)
        self._max_tracked_runs = max_tracked_runs
        self._sleep = sleep
        self._runs: OrderedDict[str, CalendarRun] = OrderedDict()
        self._active_tasks: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._runs)

    def get(self, run_id: str) -> CalendarRun | None:
        return self._runs.get(run_id)

    def status(self, run_id: str) -> RunStatus | None:
        """Estado atual da execução, ou None se desconhecida."""
        run = self._runs.get(run_id)
        return run.status() if run is not None else None

    def get_or_create(self, run_id: str, params: RunParams) -> CalendarRun:
        """Reutiliza a execução existente ou agenda uma nova.

        Execução com erro é retomada com o mesmo runner de steps.
        Precisa ser chamada com um event loop em execução.
        """
        run = self._runs.get(run_id)
        if run is not None and run.state is not RunState.ERRORED:
            return run

        if run is None:
            run = CalendarRun(run_id, params, WorkflowStepRunner(sleep=self._sleep))
            self._runs[run_id] = run
            self._evict_finished()
            logger.info("calendar_run_created", extra={"run_id": run_id[:12]})
        else:
            run.state = RunState.PENDING
            run.error = None
            logger.info(
                "calendar_run_resumed",
                extra={"run_id": run_id[:12], "completed_steps": run.steps.completed_steps},
            )

        task = asyncio.create_task(self._execute(run))
        run.task = task
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return run

    async def wait(self, run_id: str) -> RunStatus | None:
        """Aguarda o término da execução (útil em testes e scripts)."""
        run = self._runs.get(run_id)
        if run is None:
            return None
        if run.task is not None:
            await asyncio.shield(run.task)
        return run.status()

    async def _execute(self, run: CalendarRun) -> None:
        token = bind_run_id(run.run_id[:12])
        try:
            async with self._semaphore:
                await self._run_executor(run)
        finally:
            reset_run_id(token)

    async def _run_executor(self, run: CalendarRun) -> None:
        run.state = RunState.RUNNING
        try:
            output = await self._executor(run.params, run.steps)
        except Exception as exc:
            run.state = RunState.ERRORED
            run.error = f"{type(exc).__name__}: {exc}"
            logger.error("calendar_run_failed", extra={"error_type": type(exc).__name__})
            return
        run.output = output
        run.state = RunState.COMPLETE
        logger.info("calendar_run_completed", extra={"steps": run.steps.completed_steps})

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "calendar_run_task_failed",
                    extra={"error_type": type(exc).__name__},
                )

    def _evict_finished(self) -> None:
        while len(self._runs) > self._max_tracked_runs:
            victim = next(
                (
                    run_id
                    for run_id, run in self._runs.items()
                    if run.state in (RunState.COMPLETE, RunState.ERRORED)
                ),
                None,
            )
            if victim is None:
                return
            del self._runs[victim]

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda execuções pendentes durante shutdown do processo."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "calendar_runs_shutdown_wait",
            extra={"pending_runs": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "calendar_runs_shutdown_cancelled",
            extra={"cancelled_runs": len(pending)},
        )
