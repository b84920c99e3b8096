"""Casos de uso do feed de calendário."""

from app.use_cases.calendar.serve_feed import (
    FeedSource,
    LegacyRuleSettings,
    ServeFeedUseCase,
    StandardizedFeed,
)
from app.use_cases.calendar.standardize_calendar import (
    BestEffortResult,
    CalendarPipeline,
    FeedIdentity,
    step_name_for,
)

__all__ = [
    "BestEffortResult",
    "CalendarPipeline",
    "FeedIdentity",
    "FeedSource",
    "LegacyRuleSettings",
    "ServeFeedUseCase",
    "StandardizedFeed",
    "step_name_for",
]
