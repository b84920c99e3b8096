"""Helpers para texto devolvido pelo serviço de padronização."""

from __future__ import annotations


def strip_code_fence(response: str) -> str:
    """Remove cerca markdown (```/```ics) ao redor da resposta, se houver."""
    text = response.strip()
    if text.startswith("```"):
        first_break = text.find("\n")
        text = text[first_break + 1 :] if first_break != -1 else ""
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def split_summary_description(response: str) -> tuple[str, str]:
    """Divide a resposta na primeira quebra de linha.

    Sem quebra de linha, tudo vira resumo e a descrição fica vazia.
    """
    summary, _, description = response.partition("\n")
    return summary.strip(), description.strip()
