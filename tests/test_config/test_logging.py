"""Testes para config.logging."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from app.observability import (
    bind_run_id,
    get_correlation_id,
    get_run_id,
    reset_correlation_id,
    reset_run_id,
    set_correlation_id,
)
from config.logging import (
    FIELD_RENAME_MAP,
    LOG_FIELDS,
    ContextFieldsFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "evento", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("app.teste", logging.INFO, __file__, 1, msg, None, None)
    for name, value in extra.items():
        setattr(record, name, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize("level", ["DEBUG", "info", "Warning", "ERROR", "CRITICAL"])
    def test_sets_root_level(self, level: str) -> None:
        configure_logging(level=level)

        assert logging.getLogger().level == logging.getLevelName(level.upper())

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging()

        assert len(root.handlers) == 1
        assert any(isinstance(f, ContextFieldsFilter) for f in root.handlers[0].filters)

    def test_context_fields_default_to_empty(self) -> None:
        configure_logging()
        handler = logging.getLogger().handlers[0]
        record = _record()

        handler.filter(record)

        assert record.correlation_id == ""
        assert record.run_id == ""
        assert record.service == DEFAULT_SERVICE_NAME

    def test_quiets_http_client_loggers(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "ddd_calendar"


class TestContextFieldsFilter:
    """Testes para ContextFieldsFilter."""

    def test_injects_context_from_getters(self) -> None:
        log_filter = ContextFieldsFilter(
            "svc", {"correlation_id": lambda: "corr-1", "run_id": lambda: "run-1"}
        )
        record = _record()

        assert log_filter.filter(record) is True
        assert (record.service, record.correlation_id, record.run_id) == ("svc", "corr-1", "run-1")
        assert log_filter.fields == ("correlation_id", "run_id")

    def test_explicit_extra_wins(self) -> None:
        log_filter = ContextFieldsFilter("svc", {"correlation_id": lambda: "do-contexto"})
        record = _record(correlation_id="explicito")

        log_filter.filter(record)

        assert record.correlation_id == "explicito"

    def test_reads_context_vars(self) -> None:
        log_filter = ContextFieldsFilter(
            "svc", {"correlation_id": get_correlation_id, "run_id": get_run_id}
        )
        corr_token = set_correlation_id("req-42")
        run_token = bind_run_id("abc123")
        try:
            record = _record()
            log_filter.filter(record)
        finally:
            reset_run_id(run_token)
            reset_correlation_id(corr_token)

        assert record.correlation_id == "req-42"
        assert record.run_id == "abc123"
        assert get_run_id() == ""


class TestJsonFormatter:
    """Testes para create_json_formatter."""

    def test_output_has_renamed_fixed_fields(self) -> None:
        formatter = create_json_formatter()
        record = _record("calendar_run_completed", service="svc", correlation_id="c", run_id="r", steps=3)

        payload = json.loads(formatter.format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.teste"
        assert payload["message"] == "calendar_run_completed"
        assert payload["run_id"] == "r"
        assert payload["steps"] == 3

    def test_field_constants(self) -> None:
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}
        assert {"service", "correlation_id", "run_id"} <= set(LOG_FIELDS)


class TestHelpers:
    """Testes de get_logger e log_fallback."""

    def test_get_logger_returns_named_logger(self) -> None:
        assert get_logger("app.modulo") is logging.getLogger("app.modulo")

    def test_log_fallback_with_all_params(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "calendar_pipeline", reason="step_retry_exhausted", elapsed_ms=12.5)

        logger.info.assert_called_once_with(
            "fallback_applied",
            extra={
                "fallback_used": True,
                "component": "calendar_pipeline",
                "reason": "step_retry_exhausted",
                "elapsed_ms": 12.5,
            },
        )

    def test_log_fallback_without_optional_params(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "event_standardizer")

        assert logger.info.call_args.kwargs["extra"] == {
            "fallback_used": True,
            "component": "event_standardizer",
        }
