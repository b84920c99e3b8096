"""Testes do CalendarPipeline."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from api.codecs.ics import parse
from app.infra.stores.redis_key_value_store import RedisKeyValueStore
from app.services.event_canonicalizer import canonical_key
from app.services.event_standardizer import EventStandardizer
from app.services.standard_event_cache import StandardEventCache
from app.use_cases.calendar.standardize_calendar import (
    CalendarPipeline,
    FeedIdentity,
    step_name_for,
)
from app.workflows.calendar_runs import RunParams
from app.workflows.steps import StepOptions, WorkflowStepRunner
from tests.fakes.calendar_samples import THREE_EVENT_CALENDAR, make_event
from tests.fakes.recording_key_value_store import RecordingKeyValueStore
from tests.fakes.scripted_text_standardizer import Reply, ScriptedTextStandardizer
from utils.errors import FormatError, TextStandardizationError

_FAST_STEPS = StepOptions(retry_limit=1, retry_delay_seconds=0, timeout_seconds=5)


def _prefix_reply(user_text: str) -> Reply:
    summary, _, _ = user_text.partition("\n")
    return f"Std {summary}\nDescrição padronizada"


def _failing_on_see_notes(user_text: str) -> Reply:
    if "SEE NOTES" in user_text:
        return TextStandardizationError("serviço fora")
    return _prefix_reply(user_text)


def _pipeline(
    replies, store: RecordingKeyValueStore | None = None
) -> tuple[CalendarPipeline, ScriptedTextStandardizer, StandardEventCache]:
    cache = StandardEventCache(store if store is not None else RecordingKeyValueStore())
    scripted = ScriptedTextStandardizer(replies)
    pipeline = CalendarPipeline(
        standardizer=EventStandardizer(cache, scripted),
        cache=cache,
        step_options=_FAST_STEPS,
    )
    return pipeline, scripted, cache


class TestStandardizeAll:
    """Testes de standardize_all."""

    @pytest.mark.asyncio
    async def test_standardizes_every_event_in_order(self) -> None:
        pipeline, scripted, _ = _pipeline(_prefix_reply)

        output = parse(await pipeline.standardize_all(THREE_EVENT_CALENDAR))

        summaries = [event.text("SUMMARY") for event in output.children("VEVENT")]
        assert summaries == [
            "Std KHraces Trail Team - Team Practice - still casual miles",
            "Std KHraces Trail Team - SEE NOTES",
            "Std KHraces Trail Team - Core Workout",
        ]
        assert output.text("NAME") == "DDD"
        assert output.text("PRODID") == "ddd/0.1.0"
        assert len(scripted.calls) == 3

    @pytest.mark.asyncio
    async def test_failing_event_passes_through(self) -> None:
        """Evento cujo step esgota as tentativas sai igual ao original."""
        pipeline, scripted, _ = _pipeline(_failing_on_see_notes)
        runner = WorkflowStepRunner(sleep=AsyncMock())

        output = parse(await pipeline.standardize_all(THREE_EVENT_CALENDAR, steps=runner))

        original = parse(THREE_EVENT_CALENDAR).children("VEVENT")[1]
        first, second, third = output.children("VEVENT")
        assert second == original
        assert first.text("SUMMARY").startswith("Std ")
        assert third.text("SUMMARY").startswith("Std ")
        # 1 + 2 tentativas + 1
        assert len(scripted.calls) == 4
        assert not runner.completed(step_name_for(1))

    @pytest.mark.asyncio
    async def test_malformed_calendar_is_fatal(self) -> None:
        pipeline, scripted, _ = _pipeline(_prefix_reply)

        with pytest.raises(FormatError):
            await pipeline.standardize_all("BEGIN:VCALENDAR\r\nBEGIN:VEVENT\r\n")

        assert scripted.calls == []

    @pytest.mark.asyncio
    async def test_completed_steps_are_not_repeated(self) -> None:
        pipeline, scripted, _ = _pipeline(_prefix_reply)
        runner = WorkflowStepRunner(sleep=AsyncMock())

        first = await pipeline.standardize_all(THREE_EVENT_CALENDAR, force_reprocess=True, steps=runner)
        second = await pipeline.standardize_all(THREE_EVENT_CALENDAR, force_reprocess=True, steps=runner)

        assert first == second
        assert len(scripted.calls) == 3

    @pytest.mark.asyncio
    async def test_custom_identity(self) -> None:
        pipeline, _, _ = _pipeline(_prefix_reply)
        pipeline.identity = FeedIdentity(name="Trail", product_id="trail/1")

        output = parse(await pipeline.standardize_all(THREE_EVENT_CALENDAR))

        assert output.text("NAME") == "Trail"
        assert output.text("PRODID") == "trail/1"

    @pytest.mark.asyncio
    async def test_execute_run_forwards_params(self) -> None:
        pipeline, scripted, _ = _pipeline(_prefix_reply)
        await pipeline.standardize_all(THREE_EVENT_CALENDAR)

        await pipeline.execute_run(
            RunParams(THREE_EVENT_CALENDAR, force_reprocess=True),
            WorkflowStepRunner(sleep=AsyncMock()),
        )

        assert len(scripted.calls) == 6


class TestAssembleBestEffort:
    """Testes de assemble_best_effort."""

    @pytest.mark.asyncio
    async def test_replaces_only_cached_events(self) -> None:
        store = RecordingKeyValueStore()
        pipeline, scripted, cache = _pipeline(_prefix_reply, store)
        originals = parse(THREE_EVENT_CALENDAR).children("VEVENT")
        standard = make_event(SUMMARY="Fast Finish 9mi", DESCRIPTION="Group 3")
        await cache.put(canonical_key(originals[1]), standard)

        result = await pipeline.assemble_best_effort(THREE_EVENT_CALENDAR)

        events = parse(result.calendar_text).children("VEVENT")
        assert events == [originals[0], standard, originals[2]]
        assert result.total_events == 3
        assert result.cached_events == 1
        assert scripted.calls == []
        assert len(store.get_many_calls) == 1

    @pytest.mark.asyncio
    async def test_empty_cache_returns_originals_with_identity(self) -> None:
        pipeline, _, _ = _pipeline(_prefix_reply)

        result = await pipeline.assemble_best_effort(THREE_EVENT_CALENDAR)

        output = parse(result.calendar_text)
        assert output.text("NAME") == "DDD"
        assert output.children("VEVENT") == parse(THREE_EVENT_CALENDAR).children("VEVENT")
        assert result.cached_events == 0

    @pytest.mark.asyncio
    async def test_corrupted_store_value_is_served_as_original(self) -> None:
        redis = MagicMock()
        redis.mget = AsyncMock(return_value=[b"\xff\xfe lixo", None, None])
        cache = StandardEventCache(RedisKeyValueStore(redis))
        pipeline = CalendarPipeline(
            standardizer=EventStandardizer(cache, ScriptedTextStandardizer(_prefix_reply)),
            cache=cache,
            step_options=_FAST_STEPS,
        )

        result = await pipeline.assemble_best_effort(THREE_EVENT_CALENDAR)

        assert result.cached_events == 0
        assert parse(result.calendar_text).children("VEVENT") == parse(
            THREE_EVENT_CALENDAR
        ).children("VEVENT")

    @pytest.mark.asyncio
    async def test_malformed_calendar_is_fatal(self) -> None:
        pipeline, _, _ = _pipeline(_prefix_reply)

        with pytest.raises(FormatError):
            await pipeline.assemble_best_effort("lixo")
