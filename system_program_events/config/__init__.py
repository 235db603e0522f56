"""
Configuration management for System Program Events.

Loads and validates settings from environment variables and an optional
.env file. Exposes a single source of truth for service configuration.
"""

from system_program_events.config.settings import (  # noqa: F401
    LogConfig,
    Settings,
    get_log_config,
    get_settings,
    reset_settings_cache,
)

__all__ = ["LogConfig", "Settings", "get_log_config", "get_settings", "reset_settings_cache"]
