"""
Structured logging for System Program Events.

JSON logs with timestamp, event_type and transaction context.
Use get_logger() in all modules for aggregation-friendly output.
"""

from system_program_events.events_logging.logger import bind_transaction, get_logger

__all__ = ["bind_transaction", "get_logger"]
