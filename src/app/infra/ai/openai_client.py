"""Cliente OpenAI real para produção.

Implementa TextStandardizerProtocol com chamadas reais à API OpenAI.
Implementação de IO: pertence a app/infra.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import httpx

from ai.prompts import build_messages, load_event_standardizer_prompt
from app.infra.ai._openai_http import call_openai_api
from app.protocols.text_standardizer import TextStandardizerProtocol

if TYPE_CHECKING:
    from ai.config.settings import AISettings
    from ai.prompts import StandardizerPrompt

logger = logging.getLogger(__name__)

_POINT_NAME = "event_standardizer"


class OpenAITextStandardizer(TextStandardizerProtocol):
    """Padronizador de eventos via chat completions.

    Usa httpx para requests async. Resposta inutilizável (vazia, ilegível,
    4xx definitivo) retorna None e o evento é repassado. Falha transitória
    (timeout, transporte, 429, 5xx) levanta TextStandardizationError para o
    step do pipeline repetir a chamada.
    """

    __slots__ = ("_api_key", "_http_client", "_owns_client", "_prompt", "_settings")

    def __init__(
        self,
        settings: AISettings | None = None,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        prompt: StandardizerPrompt | None = None,
    ) -> None:
        """Inicializa cliente OpenAI.

        O artefato de prompt é carregado do YAML do modo de payload quando
        não for injetado; erro de asset propaga (configuração inválida).
        """
        from ai.config.settings import get_ai_settings

        self._settings = settings or get_ai_settings()
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY", "")
        self._http_client = http_client
        self._owns_client = http_client is None
        self._prompt = prompt or load_event_standardizer_prompt(self._settings.prompt_asset)

    @property
    def prompt(self) -> StandardizerPrompt:
        return self._prompt

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._settings.timeout.request_timeout,
            )
        return self._http_client

    async def standardize(self, user_text: str) -> str | None:
        """Envia system prompt + few-shot + turno do usuário."""
        client = await self._get_http_client()
        content = await call_openai_api(
            http_client=client,
            api_key=self._api_key,
            settings=self._settings,
            messages=build_messages(self._prompt, user_text),
            point_name=_POINT_NAME,
        )
        if content is None or not content.strip():
            return None
        return content

    async def aclose(self) -> None:
        """Fecha o cliente HTTP criado internamente."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
