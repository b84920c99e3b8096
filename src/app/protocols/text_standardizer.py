"""Protocolo de domínio para o serviço externo de padronização de texto.

A implementação recebe apenas o turno do usuário; o system prompt e os
exemplos few-shot fazem parte da configuração da implementação.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextStandardizerProtocol(ABC):
    """Contrato assíncrono do serviço de padronização."""

    @abstractmethod
    async def standardize(self, user_text: str) -> str | None:
        """Retorna o texto padronizado ou None se não houver resposta utilizável.

        Falhas transitórias podem ser sinalizadas com TextStandardizationError;
        o pipeline repete o passo e, esgotadas as tentativas, repassa o evento.
        """
