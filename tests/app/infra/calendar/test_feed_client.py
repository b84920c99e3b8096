"""Testes do CalendarFeedClient com httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from app.infra.calendar.feed_client import CalendarFeedClient, FeedClientConfig
from utils.errors import FeedUnavailableError

_URL = "https://calendar.example.com/team.ics"


def _feed_client(handler, max_retries: int = 2) -> CalendarFeedClient:
    config = FeedClientConfig(url=_URL, max_retries=max_retries, backoff_base_seconds=0)
    return CalendarFeedClient(config, httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestCalendarFeedClient:
    """Testes do CalendarFeedClient."""

    @pytest.mark.asyncio
    async def test_returns_body_unchanged(self) -> None:
        body = "BEGIN:VCALENDAR\r\nEND:VCALENDAR\r\n"

        client = _feed_client(lambda request: httpx.Response(200, text=body))

        assert await client.fetch_original() == body

    @pytest.mark.asyncio
    async def test_retries_server_errors(self) -> None:
        responses = [httpx.Response(503), httpx.Response(200, text="ok")]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        assert await _feed_client(handler).fetch_original() == "ok"

    @pytest.mark.asyncio
    async def test_retries_transport_errors(self) -> None:
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) < 3:
                raise httpx.ConnectError("recusado", request=request)
            return httpx.Response(200, text="ok")

        assert await _feed_client(handler).fetch_original() == "ok"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self) -> None:
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(502)

        with pytest.raises(FeedUnavailableError):
            await _feed_client(handler, max_retries=1).fetch_original()

        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self) -> None:
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(404)

        with pytest.raises(FeedUnavailableError):
            await _feed_client(handler).fetch_original()

        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_missing_url(self) -> None:
        client = CalendarFeedClient(FeedClientConfig(url=""))

        with pytest.raises(FeedUnavailableError):
            await client.fetch_original()
