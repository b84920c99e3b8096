"""Loaders de assets YAML de prompt.

Centraliza leitura dos YAMLs que versionam o formato de saída esperado do
serviço de padronização (system prompt + exemplos few-shot), com cache.

Observação: IO local (filesystem) é permitido aqui por se tratar de configuração
e assets versionados do repositório (sem rede).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

_AI_DIR = Path(__file__).resolve().parents[1]
_PROMPTS_YAML_DIR = _AI_DIR / "prompts" / "yaml"


class PromptAssetError(RuntimeError):
    """Erro ao carregar assets YAML de prompt."""


def _resolve_relative_path(base_dir: Path, relative_path: str) -> Path:
    if not relative_path:
        raise PromptAssetError("relative_path vazio")
    rel = Path(relative_path)
    # Em Windows, caminhos iniciando com "/" podem nao ser reconhecidos por
    # Path.is_absolute(); por isso validamos tambem por prefixo.
    if rel.is_absolute() or relative_path.startswith(("/", "\\")):
        raise PromptAssetError("relative_path deve ser relativo")
    if ".." in rel.parts:
        raise PromptAssetError("relative_path invalido (..) não permitido")
    return (base_dir / rel).resolve()


@lru_cache(maxsize=64)
def load_prompt_yaml(relative_path: str) -> dict[str, Any]:
    """Carrega YAML em `src/ai/prompts/yaml/` como dict."""
    path = _resolve_relative_path(_PROMPTS_YAML_DIR, relative_path)
    if not path.exists():
        raise PromptAssetError(f"Arquivo de prompt YAML nao encontrado: {relative_path}")
    if not path.is_file():
        raise PromptAssetError(f"Caminho de prompt YAML invalido: {relative_path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover
        raise PromptAssetError(f"YAML invalido em {relative_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise PromptAssetError(f"YAML de prompt deve ser dict: {relative_path}")
    return data


def load_system_prompt(relative_path: str) -> str:
    """Carrega campo `system_prompt` de um YAML em `src/ai/prompts/yaml/`."""
    data = load_prompt_yaml(relative_path)
    system_prompt = data.get("system_prompt")
    if not isinstance(system_prompt, str) or not system_prompt.strip():
        raise PromptAssetError(f"Campo `system_prompt` ausente/invalido: {relative_path}")
    return system_prompt.strip()


def load_few_shot_examples(relative_path: str) -> list[tuple[str, str]]:
    """Carrega campo `examples` (pares user/assistant) de um YAML de prompt."""
    data = load_prompt_yaml(relative_path)
    examples = data.get("examples")
    if not isinstance(examples, list):
        raise PromptAssetError(f"Campo `examples` ausente/invalido: {relative_path}")

    pairs: list[tuple[str, str]] = []
    for index, example in enumerate(examples):
        user = example.get("user") if isinstance(example, dict) else None
        assistant = example.get("assistant") if isinstance(example, dict) else None
        if not isinstance(user, str) or not isinstance(assistant, str):
            raise PromptAssetError(
                f"Exemplo #{index} deve ter `user` e `assistant` texto: {relative_path}"
            )
        pairs.append((user.strip("\n"), assistant.strip("\n")))
    return pairs


def load_prompt_version(relative_path: str) -> str:
    """Versão declarada do formato de saída (campo `version`, opcional)."""
    version = load_prompt_yaml(relative_path).get("version", "")
    return str(version)


def clear_prompt_assets_cache() -> None:
    """Limpa caches (útil em testes)."""
    load_prompt_yaml.cache_clear()
