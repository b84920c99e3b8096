"""Utilitários de IA.

Re-exporta helpers de tratamento da resposta do serviço de padronização.
"""

from ai.utils._reply_text import split_summary_description, strip_code_fence

__all__ = [
    "split_summary_description",
    "strip_code_fence",
]
