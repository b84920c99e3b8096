"""Prompt do padronizador de eventos.

O formato de saída é definido pelo YAML versionado (system prompt + exemplos
few-shot). Este módulo só monta a conversa enviada ao serviço.
"""

from __future__ import annotations

from dataclasses import dataclass

from ai.config.prompt_assets_loader import (
    load_few_shot_examples,
    load_prompt_version,
    load_system_prompt,
)


@dataclass(frozen=True, slots=True)
class StandardizerPrompt:
    """Artefato de prompt carregado de YAML.

    Atributos:
        system_prompt: Instrução de sistema
        examples: Pares (user, assistant) few-shot, na ordem do arquivo
        version: Versão declarada do formato de saída
    """

    system_prompt: str
    examples: tuple[tuple[str, str], ...]
    version: str = ""


def load_event_standardizer_prompt(relative_path: str) -> StandardizerPrompt:
    """Carrega o artefato de prompt de `src/ai/prompts/yaml/`.

    Raises:
        PromptAssetError: YAML ausente ou inválido.
    """
    return StandardizerPrompt(
        system_prompt=load_system_prompt(relative_path),
        examples=tuple(load_few_shot_examples(relative_path)),
        version=load_prompt_version(relative_path),
    )


def format_event_user_text(summary: str, description: str) -> str:
    """Turno do usuário no modo summary: resumo na primeira linha, descrição depois."""
    return f"{summary}\n{description}"


def build_messages(prompt: StandardizerPrompt, user_text: str) -> list[dict[str, str]]:
    """Monta a lista de mensagens no formato chat completions."""
    messages = [{"role": "system", "content": prompt.system_prompt}]
    for user, assistant in prompt.examples:
        messages.append({"role": "user", "content": user})
        messages.append({"role": "assistant", "content": assistant})
    messages.append({"role": "user", "content": user_text})
    return messages
