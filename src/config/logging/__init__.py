"""Logging JSON estruturado do serviço.

Uso:
    from config.logging import configure_logging, get_logger, log_fallback

Todo record carrega: asctime, level, logger, message, service,
correlation_id e run_id.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import ContextFieldsFilter
from config.logging.formatters import FIELD_RENAME_MAP, LOG_FIELDS, create_json_formatter

__all__ = [
    "FIELD_RENAME_MAP",
    "LOG_FIELDS",
    "ContextFieldsFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
