"""
Environment variable loading for System Program Events.

- TARGET_PROGRAM_ID: program whose instructions are decoded
  (default: System Program, 11111111111111111111111111111111)
- LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
- LOG_FORMAT: json | console (default: json)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is system_program_events/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env vars."""
    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH, override=False)


def get_env(name: str, default: str = "") -> str:
    """Return a stripped env variable after loading .env; default when unset or blank."""
    load_env()
    value = (os.getenv(name) or "").strip()
    return value or default
