"""Cliente HTTP do feed iCalendar de origem."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from utils.errors import FeedUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FeedClientConfig:
    """Configuração do cliente do feed."""

    url: str
    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 5.0


class CalendarFeedClient:
    """Busca o texto do feed de origem, com tentativas para erros transitórios.

    Args:
        config: URL e limites de tentativa
        http_client: Cliente httpx compartilhado (criado sob demanda se ausente)
    """

    def __init__(
        self,
        config: FeedClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                follow_redirects=True,
            )
        return self._http_client

    async def fetch_original(self) -> str:
        """Retorna o feed de origem sem alterações.

        Raises:
            FeedUnavailableError: URL ausente, status de erro ou falha de rede
                após as tentativas.
        """
        if not self._config.url:
            raise FeedUnavailableError("CALENDAR_FEED_URL não configurada")

        client = await self._get_http_client()
        for attempt in range(self._config.max_retries + 1):
            try:
                response = await client.get(self._config.url)
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if attempt >= self._config.max_retries:
                    raise FeedUnavailableError("Falha de rede ao buscar feed") from exc
                await self._backoff_sleep(attempt)
                continue

            if response.status_code == 429 or response.status_code >= 500:
                if attempt >= self._config.max_retries:
                    raise FeedUnavailableError(
                        f"Feed respondeu status {response.status_code}"
                    )
                await self._backoff_sleep(attempt)
                continue
            if response.status_code >= 400:
                raise FeedUnavailableError(f"Feed respondeu status {response.status_code}")

            logger.debug(
                "calendar_feed_fetched",
                extra={"bytes": len(response.content), "attempt": attempt + 1},
            )
            return response.text

        raise FeedUnavailableError("Tentativas esgotadas ao buscar feed")

    async def _backoff_sleep(self, attempt: int) -> None:
        backoff = min(
            (2**attempt) * self._config.backoff_base_seconds,
            self._config.backoff_max_seconds,
        )
        logger.info("calendar_feed_backoff", extra={"backoff_seconds": backoff})
        await asyncio.sleep(backoff)

    async def aclose(self) -> None:
        """Fecha o cliente HTTP criado internamente."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
