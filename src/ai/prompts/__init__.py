"""Prompts do módulo AI: padronizador de eventos.

Arquivos:
- yaml/event_standardizer.yaml: modo summary (resumo + descrição)
- yaml/event_standardizer_ics.yaml: modo ics (bloco VEVENT)
- event_standardizer_prompt.py: monta a conversa (system + few-shot + usuário)

Loader: ai/config/prompt_assets_loader.py
"""

from ai.prompts.event_standardizer_prompt import (
    StandardizerPrompt,
    build_messages,
    format_event_user_text,
    load_event_standardizer_prompt,
)

__all__ = [
    "StandardizerPrompt",
    "build_messages",
    "format_event_user_text",
    "load_event_standardizer_prompt",
]
