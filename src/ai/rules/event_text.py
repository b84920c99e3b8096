"""Regras determinísticas de limpeza de texto de eventos.

Usadas pelo feed legado e pelo padronizador mock (sem LLM).
"""

from __future__ import annotations

import re

_SEE_NOTES_RE = re.compile(r"^(.*?)\s*-?\s*see notes\.?$", re.IGNORECASE)
_LEVEL_RE = re.compile(r" *Level (\d)")
_ARRIVAL_TIME_RE = re.compile(r"(.*?)\s*\(Arrival Time: .*\)$", re.DOTALL)

# Linhas "Group ..." mantidas: instruções que valem para o grupo 3
GROUP_THREE_PREFIXES = (
    "Group 3",
    "Group 2,3",
    "Group 2, and 3",
    "Group 2, 2.5, and 3",
    "Group 2.5 & 3",
    "Group 2.5, 3",
    "Group one do two repeats, group 2,2.5 & 3",
)


def clean_summary(summary: str) -> str:
    """Remove o sufixo "see notes" (com ou sem traço) do resumo."""
    match = _SEE_NOTES_RE.match(summary)
    return match.group(1) if match else summary


def clean_description(description: str) -> str:
    """Mantém só as linhas relevantes ao grupo 3 e remove o horário de chegada."""
    text = description.replace("Group  3", "Group 3")
    text = _LEVEL_RE.sub(r"Group \1", text)
    lines = [line.strip() for line in text.split("\n")]
    kept = [
        line
        for line in lines
        if line.startswith(GROUP_THREE_PREFIXES) or not line.startswith("Group")
    ]
    text = "\n".join(kept).replace("\n\n\n", "\n").strip()

    match = _ARRIVAL_TIME_RE.match(text)
    return match.group(1) if match else text
