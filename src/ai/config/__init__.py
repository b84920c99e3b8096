"""Configuração de IA.

Re-exporta settings e loaders de assets de prompt para uso externo.
"""

from ai.config.prompt_assets_loader import (
    PromptAssetError,
    clear_prompt_assets_cache,
    load_few_shot_examples,
    load_prompt_version,
    load_prompt_yaml,
    load_system_prompt,
)
from ai.config.settings import (
    PROMPT_ASSETS,
    AIModelSettings,
    AISettings,
    AITimeoutSettings,
    PayloadMode,
    get_ai_settings,
)

__all__ = [
    "PROMPT_ASSETS",
    "AIModelSettings",
    "AISettings",
    "AITimeoutSettings",
    "PayloadMode",
    "PromptAssetError",
    "clear_prompt_assets_cache",
    "get_ai_settings",
    "load_few_shot_examples",
    "load_prompt_version",
    "load_prompt_yaml",
    "load_system_prompt",
]
