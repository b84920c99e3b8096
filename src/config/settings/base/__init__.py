"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.store import (
    StandardEventStoreBackend,
    StandardEventStoreSettings,
    get_standard_event_store_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    "StandardEventStoreBackend",
    # Store
    "StandardEventStoreSettings",
    "get_base_settings",
    "get_standard_event_store_settings",
]
