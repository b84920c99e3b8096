"""Factories de stores, clientes e serviços do feed a partir das settings."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ai.config.settings import AISettings, get_ai_settings
from ai.core.mock_client import MockTextStandardizer
from app.infra.ai.openai_client import OpenAITextStandardizer
from app.infra.calendar.feed_client import CalendarFeedClient, FeedClientConfig
from app.infra.stores import MemoryKeyValueStore, RedisKeyValueStore
from app.services.event_standardizer import EventStandardizer
from app.services.standard_event_cache import StandardEventCache
from app.use_cases.calendar.serve_feed import LegacyRuleSettings, ServeFeedUseCase
from app.use_cases.calendar.standardize_calendar import CalendarPipeline, FeedIdentity
from app.workflows.calendar_runs import CalendarRunRegistry
from app.workflows.steps import BackoffPolicy, SleepFunc, StepOptions

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from app.protocols.key_value_store import AsyncKeyValueStoreProtocol
    from app.protocols.text_standardizer import TextStandardizerProtocol
    from config.settings import (
        CalendarSettings,
        OpenAISettings,
        StandardEventStoreSettings,
    )

logger = logging.getLogger(__name__)


def create_key_value_store(
    settings: StandardEventStoreSettings,
    redis_client: AsyncRedis[bytes] | None = None,
) -> AsyncKeyValueStoreProtocol:
    """Cria store chave/valor baseado na configuração."""
    if settings.backend == "redis":
        if redis_client is None:
            from app.bootstrap.clients import create_async_redis_client

            redis_client = create_async_redis_client()
        logger.info("standard_event_store_created", extra={"backend": "redis"})
        return RedisKeyValueStore(redis_client, prefix=settings.key_prefix)

    logger.info("standard_event_store_created", extra={"backend": "memory"})
    return MemoryKeyValueStore()


def create_text_standardizer(
    openai_settings: OpenAISettings,
    ai_settings: AISettings | None = None,
) -> TextStandardizerProtocol:
    """OpenAI quando habilitado; padronizador mock caso contrário."""
    ai_settings = ai_settings or get_ai_settings()
    if openai_settings.uses_mock:
        logger.info("text_standardizer_created", extra={"backend": "mock"})
        return MockTextStandardizer(settings=ai_settings)

    logger.info(
        "text_standardizer_created",
        extra={"backend": "openai", "payload_mode": ai_settings.payload_mode.value},
    )
    return OpenAITextStandardizer(settings=ai_settings, api_key=openai_settings.api_key)


def step_options_from(settings: CalendarSettings) -> StepOptions:
    return StepOptions(
        retry_limit=settings.step_retry_limit,
        retry_delay_seconds=settings.step_retry_delay_seconds,
        backoff=BackoffPolicy(settings.step_backoff),
        timeout_seconds=settings.step_timeout_seconds,
    )


@dataclass(slots=True)
class CalendarServices:
    """Serviços do feed montados para uma instância da aplicação."""

    feed: ServeFeedUseCase
    pipeline: CalendarPipeline
    runs: CalendarRunRegistry
    store: AsyncKeyValueStoreProtocol
    text_standardizer: TextStandardizerProtocol
    feed_client: CalendarFeedClient

    async def aclose(self, drain_timeout_seconds: float = 30.0) -> None:
        """Aguarda execuções pendentes e fecha clientes HTTP próprios."""
        await self.runs.drain(timeout_seconds=drain_timeout_seconds)
        await self.feed_client.aclose()
        close = getattr(self.text_standardizer, "aclose", None)
        if callable(close):
            await close()


def build_calendar_services(
    *,
    calendar_settings: CalendarSettings,
    store: AsyncKeyValueStoreProtocol,
    text_standardizer: TextStandardizerProtocol,
    feed_client: CalendarFeedClient | None = None,
    ai_settings: AISettings | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> CalendarServices:
    """Conecta cache, padronizador, pipeline e registro de execuções."""
    ai_settings = ai_settings or get_ai_settings()
    cache = StandardEventCache(store)
    standardizer = EventStandardizer(
        cache,
        text_standardizer,
        ai_settings.payload_mode,
        remote_location=calendar_settings.remote_meeting_location,
        remote_hours=calendar_settings.remote_meeting_hours,
        default_hours=calendar_settings.default_event_hours,
    )
    pipeline = CalendarPipeline(
        standardizer=standardizer,
        cache=cache,
        step_options=step_options_from(calendar_settings),
        identity=FeedIdentity(
            name=calendar_settings.feed_name,
            product_id=calendar_settings.product_id,
        ),
    )
    runs = CalendarRunRegistry(
        pipeline.execute_run,
        max_concurrent_runs=calendar_settings.max_concurrent_runs,
        sleep=sleep,
    )
    feed_client = feed_client or CalendarFeedClient(
        FeedClientConfig(url=calendar_settings.feed_url)
    )
    feed = ServeFeedUseCase(
        feed_client=feed_client,
        pipeline=pipeline,
        runs=runs,
        legacy_rules=LegacyRuleSettings(
            remote_location=calendar_settings.remote_meeting_location,
            remote_hours=calendar_settings.remote_meeting_hours,
            default_hours=calendar_settings.default_event_hours,
        ),
    )
    return CalendarServices(
        feed=feed,
        pipeline=pipeline,
        runs=runs,
        store=store,
        text_standardizer=text_standardizer,
        feed_client=feed_client,
    )


def create_calendar_services(redis_client: AsyncRedis[bytes] | None = None) -> CalendarServices:
    """Monta os serviços do feed a partir das settings de ambiente."""
    from config.settings import (
        get_calendar_settings,
        get_openai_settings,
        get_standard_event_store_settings,
    )

    ai_settings = get_ai_settings()
    return build_calendar_services(
        calendar_settings=get_calendar_settings(),
        store=create_key_value_store(get_standard_event_store_settings(), redis_client),
        text_standardizer=create_text_standardizer(get_openai_settings(), ai_settings),
        ai_settings=ai_settings,
    )
