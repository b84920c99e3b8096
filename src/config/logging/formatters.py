"""Formatter JSON (python-json-logger) com campos fixos de rastreamento.

Exemplo de output:
    {
        "asctime": "2025-04-05 06:30:00,123",
        "level": "INFO",
        "logger": "app.workflows.calendar_runs",
        "message": "calendar_run_completed",
        "service": "ddd_calendar",
        "correlation_id": "5f0c7e9a-...",
        "run_id": "9b1d3c44e0aa",
        "steps": 12
    }
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem de emissão dos campos fixos
LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "service",
    "correlation_id",
    "run_id",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(fields: tuple[str, ...] = LOG_FIELDS) -> JsonFormatter:
    """JsonFormatter com os campos fixos; campos de `extra` vêm em seguida."""
    format_string = " ".join(f"%({field})s" for field in fields)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
