"""Implementações de IO do feed de calendário."""

from app.infra.calendar.feed_client import CalendarFeedClient, FeedClientConfig

__all__ = ["CalendarFeedClient", "FeedClientConfig"]
