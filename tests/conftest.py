"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from plugin_helpers.logging_config import DEBUG_FLAG_ENV, LOG_APPEND_ENV, LOG_DIR_ENV


@pytest.fixture(autouse=True)
def isolated_helper_environment(monkeypatch):
    """Keep a developer's helper flags out of environment lookups."""
    for name in (DEBUG_FLAG_ENV, LOG_APPEND_ENV, LOG_DIR_ENV):
        monkeypatch.delenv(name, raising=False)
