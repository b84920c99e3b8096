"""Regras determinísticas para IA.

Re-exporta as regras de limpeza de texto de eventos.
"""

from ai.rules.event_text import GROUP_THREE_PREFIXES, clean_description, clean_summary

__all__ = [
    "GROUP_THREE_PREFIXES",
    "clean_description",
    "clean_summary",
]
