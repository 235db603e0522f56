"""
Pytest fixtures for System Program Events tests.

Settings are cached process-wide; every test starts from a clean cache
and without TARGET_PROGRAM_ID / LOG_* overrides in the environment.
"""

from __future__ import annotations

import pytest

from system_program_events.config import reset_settings_cache


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("TARGET_PROGRAM_ID", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
