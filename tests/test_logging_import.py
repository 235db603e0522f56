"""
Test that events_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from events_logging and use the logger."""
    from system_program_events.events_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_bind_transaction():
    """bind_transaction returns a usable logger with the signature bound."""
    from system_program_events.events_logging import bind_transaction

    log = bind_transaction("5sig", 3)
    log.warning("instruction_skipped", instruction_index=1, code="truncated_data")
