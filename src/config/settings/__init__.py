"""Agregador de settings do serviço de calendário.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# AI/LLM settings
from config.settings.ai import (
    OpenAISettings,
    get_openai_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    StandardEventStoreBackend,
    StandardEventStoreSettings,
    get_base_settings,
    get_standard_event_store_settings,
)

# Calendar settings
from config.settings.calendar import (
    CalendarSettings,
    StepBackoff,
    get_calendar_settings,
)

__all__ = [
    # Base
    "BaseSettings",
    # Calendar
    "CalendarSettings",
    "Environment",
    # AI
    "OpenAISettings",
    "StandardEventStoreBackend",
    "StandardEventStoreSettings",
    "StepBackoff",
    "get_base_settings",
    "get_calendar_settings",
    "get_openai_settings",
    "get_standard_event_store_settings",
]
