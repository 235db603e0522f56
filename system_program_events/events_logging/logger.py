"""
Structured JSON logging: timestamp, event_type, signature, instruction context.

structlog with ISO timestamps, log level, and consistent keys for
aggregation. All modules should use get_logger() and log with an
event_type (first arg) plus signature / transaction_index /
instruction_index where relevant.

Level and format come from config.get_log_config(), which reads LOG_LEVEL
and LOG_FORMAT after loading .env. Unknown values fall back to INFO / json
and are reported once as a log_config_invalid warning.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

from system_program_events.config.settings import LogConfig, get_log_config


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog(config: LogConfig | None = None) -> None:
    """Configure structlog: JSON or console renderer, timestamp, level, event_type."""
    config = config or LogConfig()
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if config.format == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    # Logs go to stderr so the CLI can keep stdout for event JSON.
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, config.level, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    for name, value in config.invalid:
        structlog.get_logger(__name__).warning(
            "log_config_invalid", logger=__name__, variable=name, value=value,
        )


if not structlog.is_configured():
    configure_structlog(get_log_config())


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    Log with event_type (first arg) and optional context fields:
        logger = get_logger(__name__)
        logger.warning("instruction_skipped", signature=sig, instruction_index=3, code="truncated_data")
    Output (JSON): {"event_type": "instruction_skipped", "signature": "...", "instruction_index": 3,
                    "code": "truncated_data", "timestamp": "...", "level": "warning", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_transaction(signature: str, transaction_index: int | None = None) -> structlog.BoundLogger:
    """Return a logger with the transaction signature (and index) bound to all subsequent calls."""
    log = get_logger("system_program_events").bind(signature=signature)
    if transaction_index is not None:
        log = log.bind(transaction_index=transaction_index)
    return log
