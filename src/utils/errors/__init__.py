"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    FeedUnavailableError,
    FormatError,
    InfrastructureError,
    RedisConnectionError,
    StepRetryExhaustedError,
    TextStandardizationError,
)

__all__ = [
    "FeedUnavailableError",
    "FormatError",
    "InfrastructureError",
    "RedisConnectionError",
    "StepRetryExhaustedError",
    "TextStandardizationError",
]
