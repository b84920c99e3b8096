"""Configurações para o módulo de IA.

Define settings tipados para o modelo de padronização, timeouts e o artefato
de prompt (system prompt + exemplos few-shot) usado em cada modo de payload.

Modos de payload:
- summary: usuário envia "SUMMARY\\nDESCRIPTION"; modelo responde "resumo\\ndescrição"
- ics: usuário envia o VEVENT mínimo serializado; modelo responde um VEVENT
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum


class PayloadMode(Enum):
    """Formato da conversa com o serviço de padronização."""

    SUMMARY = "summary"
    ICS = "ics"


# Nome oficial do modelo padrão
MODEL_GPT4O_MINI = "gpt-4o-mini"

PROMPT_ASSETS = {
    PayloadMode.SUMMARY: "event_standardizer.yaml",
    PayloadMode.ICS: "event_standardizer_ics.yaml",
}


@dataclass(frozen=True, slots=True)
class AIModelSettings:
    """Configurações de modelo de IA.

    Atributos:
        model: Nome do modelo
        temperature: Temperatura para geração (0 = determinístico)
        top_p: Nucleus sampling
        max_tokens: Limite de tokens na resposta
    """

    model: str = MODEL_GPT4O_MINI
    temperature: float = 0.0
    top_p: float = 0.1
    max_tokens: int = 1200


@dataclass(frozen=True, slots=True)
class AITimeoutSettings:
    """Configurações de timeout para chamadas de IA.

    Atributos:
        request_timeout: Timeout por requisição em segundos
    """

    request_timeout: float = 45.0


@dataclass(frozen=True, slots=True)
class AISettings:
    """Agregador de todas as configurações de IA.

    Exemplo de uso:
        settings = AISettings(payload_mode=PayloadMode.ICS)
    """

    model: AIModelSettings = field(default_factory=AIModelSettings)
    timeout: AITimeoutSettings = field(default_factory=AITimeoutSettings)
    payload_mode: PayloadMode = PayloadMode.SUMMARY

    @property
    def prompt_asset(self) -> str:
        """YAML de prompt correspondente ao modo de payload."""
        return PROMPT_ASSETS[self.payload_mode]


def _parse_payload_mode(value: str) -> PayloadMode:
    try:
        return PayloadMode(value.strip().lower())
    except ValueError:
        return PayloadMode.SUMMARY


def get_ai_settings() -> AISettings:
    """Retorna configurações de IA a partir do ambiente.

    Returns:
        AISettings com valores padrão ou customizados via env.
    """
    return AISettings(
        model=AIModelSettings(
            model=os.getenv("OPENAI_MODEL", MODEL_GPT4O_MINI),
            temperature=float(os.getenv("AI_TEMPERATURE", "0")),
            top_p=float(os.getenv("AI_TOP_P", "0.1")),
            max_tokens=int(os.getenv("AI_MAX_TOKENS", "1200")),
        ),
        timeout=AITimeoutSettings(
            request_timeout=float(os.getenv("OPENAI_TIMEOUT_SECONDS", "45")),
        ),
        payload_mode=_parse_payload_mode(os.getenv("AI_PAYLOAD_MODE", "summary")),
    )
