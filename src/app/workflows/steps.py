"""Execução durável de steps: tentativas, atraso, backoff e timeout.

Cada step tem um nome único dentro de uma execução. Resultados concluídos
ficam memorizados no runner, então reexecutar a mesma execução não repete
steps que já terminaram.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from utils.errors import StepRetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]


class BackoffPolicy(Enum):
    """Crescimento do atraso entre tentativas."""

    CONSTANT = "constant"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True, slots=True)
class StepOptions:
    """Opções de um step.

    Atributos:
        retry_limit: Tentativas extras após a primeira (3 => até 4 execuções)
        retry_delay_seconds: Atraso base entre tentativas
        backoff: Política de crescimento do atraso
        timeout_seconds: Limite por tentativa
    """

    retry_limit: int = 3
    retry_delay_seconds: float = 60.0
    backoff: BackoffPolicy = BackoffPolicy.CONSTANT
    timeout_seconds: float = 60.0

    def __post_init__(self) -> None:
        if self.retry_limit < 0:
            raise ValueError("retry_limit deve ser >= 0")
        if self.retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds deve ser >= 0")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds deve ser > 0")

    @property
    def max_attempts(self) -> int:
        return self.retry_limit + 1

    def delay_for(self, attempt: int) -> float:
        """Atraso após a tentativa `attempt` (1-based) falhar."""
        if self.backoff is BackoffPolicy.LINEAR:
            return self.retry_delay_seconds * attempt
        if self.backoff is BackoffPolicy.EXPONENTIAL:
            return self.retry_delay_seconds * (2 ** (attempt - 1))
        return self.retry_delay_seconds


class WorkflowStepRunner:
    """Executa steps nomeados com repetição e memoização.

    Args:
        sleep: Função de espera entre tentativas (injetável em testes)
    """

    def __init__(self, sleep: SleepFunc = asyncio.sleep) -> None:
        self._sleep = sleep
        self._results: dict[str, Any] = {}

    def completed(self, name: str) -> bool:
        return name in self._results

    @property
    def completed_steps(self) -> int:
        return len(self._results)

    async def run_step(
        self,
        name: str,
        options: StepOptions,
        body: Callable[[], Awaitable[T]],
    ) -> T:
        """Executa o step ou devolve o resultado já memorizado.

        Raises:
            StepRetryExhaustedError: Todas as tentativas falharam.
        """
        if name in self._results:
            logger.debug("workflow_step_replayed", extra={"step": name})
            return self._results[name]

        for attempt in range(1, options.max_attempts + 1):
            try:
                result = await asyncio.wait_for(body(), timeout=options.timeout_seconds)
            except Exception as exc:
                if attempt >= options.max_attempts:
                    logger.error(
                        "workflow_step_exhausted",
                        extra={
                            "step": name,
                            "attempts": attempt,
                            "error_type": type(exc).__name__,
                        },
                    )
                    raise StepRetryExhaustedError(name, attempt, exc) from exc
                delay = options.delay_for(attempt)
                logger.warning(
                    "workflow_step_retry",
                    extra={
                        "step": name,
                        "attempt": attempt,
                        "delay_seconds": delay,
                        "error_type": type(exc).__name__,
                    },
                )
                await self._sleep(delay)
                continue

            self._results[name] = result
            return result

        raise StepRetryExhaustedError(name, 0, RuntimeError("nenhuma tentativa executada"))
