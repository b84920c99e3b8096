"""Implementações concretas de IO para IA.

app/infra: implementações de IO. ai/ não faz IO direto.
"""

from app.infra.ai.openai_client import OpenAITextStandardizer

__all__ = [
    "OpenAITextStandardizer",
]
