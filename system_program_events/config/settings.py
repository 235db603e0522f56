"""
Application settings.

Loads configuration from environment variables (and .env), validates it,
and exposes typed, immutable objects:

- Settings: extraction settings (target program). Invalid values raise
  ConfigurationError. Cached; call reset_settings_cache() after changing
  the environment (tests).
- LogConfig: logging level and format. Never raises; unknown values fall
  back to the defaults and are listed in ``invalid`` so the logger can
  report them. Logging settings never affect extraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from solders.pubkey import Pubkey

from system_program_events.config.env import get_env
from system_program_events.constants import SYSTEM_PROGRAM_ID
from system_program_events.core.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"


@dataclass(frozen=True)
class Settings:
    target_program_id: str

    @property
    def target_program(self) -> Pubkey:
        return Pubkey.from_string(self.target_program_id)


@dataclass(frozen=True)
class LogConfig:
    level: str = DEFAULT_LOG_LEVEL
    format: str = DEFAULT_LOG_FORMAT
    invalid: tuple[tuple[str, str], ...] = ()
    """(variable, rejected value) pairs that fell back to defaults."""


def _validate_program_id(value: str) -> str:
    try:
        Pubkey.from_string(value)
    except ValueError as e:
        raise ConfigurationError(f"TARGET_PROGRAM_ID is not a valid 32-byte base58 key: {value!r}") from e
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings.

    Raises:
        ConfigurationError: TARGET_PROGRAM_ID is not a valid program id.
    """
    target = _validate_program_id(get_env("TARGET_PROGRAM_ID", SYSTEM_PROGRAM_ID))
    return Settings(target_program_id=target)


def get_log_config() -> LogConfig:
    """Read LOG_LEVEL / LOG_FORMAT after loading .env; fall back to defaults on unknown values."""
    invalid: list[tuple[str, str]] = []

    level = get_env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if level not in LOG_LEVELS:
        invalid.append(("LOG_LEVEL", level))
        level = DEFAULT_LOG_LEVEL

    fmt = get_env("LOG_FORMAT", DEFAULT_LOG_FORMAT).lower()
    if fmt not in LOG_FORMATS:
        invalid.append(("LOG_FORMAT", fmt))
        fmt = DEFAULT_LOG_FORMAT

    return LogConfig(level=level, format=fmt, invalid=tuple(invalid))


def reset_settings_cache() -> None:
    get_settings.cache_clear()
