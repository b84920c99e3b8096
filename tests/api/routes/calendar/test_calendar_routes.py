"""Testes dos endpoints do feed iCalendar."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import create_api_router
from api.routes.calendar.router import media_type_for
from app.use_cases.calendar.serve_feed import FeedSource, StandardizedFeed
from app.workflows.calendar_runs import RunState
from tests.fakes.calendar_samples import THREE_EVENT_CALENDAR
from utils.errors import FeedUnavailableError, FormatError


@pytest.fixture
def feed() -> AsyncMock:
    use_case = AsyncMock()
    use_case.original.return_value = THREE_EVENT_CALENDAR
    use_case.legacy.return_value = "BEGIN:VCALENDAR\r\nNAME:DDD\r\nEND:VCALENDAR\r\n"
    use_case.standardized.return_value = StandardizedFeed(
        calendar_text="BEGIN:VCALENDAR\r\nEND:VCALENDAR\r\n",
        source=FeedSource.BEST_EFFORT,
        run_id="abc",
        run_state=RunState.RUNNING,
    )
    return use_case


@pytest.fixture
def client(feed: AsyncMock) -> TestClient:
    app = FastAPI()
    app.include_router(create_api_router())
    app.state.calendar_services = SimpleNamespace(feed=feed)
    return TestClient(app)


def test_media_type_for() -> None:
    assert media_type_for("plain") == "text/plain"
    assert media_type_for(None) == "text/calendar"
    assert media_type_for("ics") == "text/calendar"


def test_original_feed(client: TestClient) -> None:
    response = client.get("/original.ics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert response.text == THREE_EVENT_CALENDAR


def test_plain_mime(client: TestClient) -> None:
    response = client.get("/original.ics", params={"mime": "plain"})

    assert response.headers["content-type"].startswith("text/plain")


def test_standardized_feed_headers(client: TestClient, feed: AsyncMock) -> None:
    response = client.get("/group3.ics")

    assert response.status_code == 200
    assert response.headers["x-calendar-source"] == "best_effort"
    assert response.headers["x-calendar-run-state"] == "running"
    feed.standardized.assert_awaited_once_with(retry=None)


def test_standardized_feed_forwards_retry(client: TestClient, feed: AsyncMock) -> None:
    client.get("/group3.ics", params={"retry": "2"})

    feed.standardized.assert_awaited_once_with(retry="2")


def test_legacy_feed(client: TestClient) -> None:
    response = client.get("/group3-legacy.ics", params={"mime": "plain"})

    assert response.status_code == 200
    assert "NAME:DDD" in response.text
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.parametrize(
    "error",
    [FeedUnavailableError("fora"), FormatError("END sem bloco", 3)],
)
@pytest.mark.parametrize(
    ("path", "method"),
    [("/original.ics", "original"), ("/group3.ics", "standardized"), ("/group3-legacy.ics", "legacy")],
)
def test_upstream_failures_return_502(
    client: TestClient, feed: AsyncMock, error: Exception, path: str, method: str
) -> None:
    getattr(feed, method).side_effect = error

    response = client.get(path)

    assert response.status_code == 502
    assert response.headers["content-type"].startswith("text/plain")
