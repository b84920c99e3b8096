"""Settings do serviço de padronização de texto (OpenAI).

OPENAI_ENABLED decide o backend do padronizador: com "false" o feed usa o
mock de regras determinísticas e nenhuma chamada de rede é feita. Modelo e
timeout são lidos das mesmas variáveis por ai.config.settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

_TRUTHY = frozenset({"true", "1", "yes", "on"})


@dataclass(frozen=True)
class OpenAISettings:
    """Credencial e chave liga/desliga do padronizador OpenAI.

    Attributes:
        api_key: Chave da API (OPENAI_API_KEY)
        model: Modelo de chat completions (OPENAI_MODEL)
        timeout_seconds: Timeout por chamada (OPENAI_TIMEOUT_SECONDS)
        enabled: False usa o padronizador mock (OPENAI_ENABLED)
    """

    api_key: str = ""
    model: str = DEFAULT_OPENAI_MODEL
    timeout_seconds: float = 45.0
    enabled: bool = True

    @property
    def uses_mock(self) -> bool:
        return not self.enabled

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.enabled and not self.api_key:
            errors.append("OPENAI_ENABLED=true exige OPENAI_API_KEY")
        if not self.model.strip():
            errors.append("OPENAI_MODEL não pode ser vazio")
        if self.timeout_seconds <= 0:
            errors.append(f"OPENAI_TIMEOUT_SECONDS deve ser > 0 (recebido {self.timeout_seconds})")
        return errors


@lru_cache(maxsize=1)
def get_openai_settings() -> OpenAISettings:
    """Lê OPENAI_* do ambiente (cacheado; limpar com cache_clear em testes)."""
    return OpenAISettings(
        api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        model=os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL).strip(),
        timeout_seconds=float(os.getenv("OPENAI_TIMEOUT_SECONDS", "45")),
        enabled=os.getenv("OPENAI_ENABLED", "true").strip().lower() in _TRUTHY,
    )
