"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.event_canonicalizer import canonical_key, minimal_event
from app.services.event_standardizer import (
    EventStandardizer,
    StandardizationOutcome,
    StandardizedEvent,
)
from app.services.standard_event_cache import StandardEventCache

__all__ = [
    "EventStandardizer",
    "StandardEventCache",
    "StandardizationOutcome",
    "StandardizedEvent",
    "canonical_key",
    "minimal_event",
]
