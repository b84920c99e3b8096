"""Core do módulo AI.

Exporta o padronizador mock para dev/test.
A implementação OpenAI está em app/infra/ai/ (IO).
"""

from ai.core.mock_client import MockTextStandardizer

__all__ = [
    "MockTextStandardizer",
]
