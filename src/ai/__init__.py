"""Módulo AI do serviço de calendário.

Padronização de eventos por LLM:
- config: settings e loaders dos assets YAML de prompt
- prompts: monta a conversa (system + few-shot + usuário)
- rules: regras determinísticas de limpeza de texto
- core: padronizador mock (dev/test)
- utils: tratamento da resposta do serviço

ai/ não faz IO de rede; o cliente OpenAI está em app/infra/ai/.
"""

from ai.config import AISettings, PayloadMode, get_ai_settings

__all__ = [
    "AISettings",
    "PayloadMode",
    "get_ai_settings",
]
