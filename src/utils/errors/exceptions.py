"""Exceções de domínio e de infraestrutura do serviço de calendário."""

from __future__ import annotations


class FormatError(ValueError):
    """Texto iCalendar malformado (blocos desbalanceados, raiz ausente, linha inválida).

    Fatal para a execução inteira: entrada inválida não é processada parcialmente.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"{message} (linha {line_number})"
        super().__init__(message)
        self.line_number = line_number


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class TextStandardizationError(InfrastructureError):
    """Falha do serviço externo de padronização de texto."""


class FeedUnavailableError(InfrastructureError):
    """Feed de calendário de origem indisponível."""


class StepRetryExhaustedError(InfrastructureError):
    """Step de workflow esgotou as tentativas configuradas."""

    def __init__(self, step_name: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"Step '{step_name}' falhou após {attempts} tentativas: "
            f"{type(last_error).__name__}"
        )
        self.step_name = step_name
        self.attempts = attempts
        self.last_error = last_error
