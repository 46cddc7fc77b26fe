"""Shared test fixtures.

Unit tests need no external services: the settings provider and tool locator
are replaced with in-memory fakes, and service settings are read from a
clean ``SHIPWRIGHT_*`` environment.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from shipwright.deploy_runtime.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop SHIPWRIGHT_* variables from the host and reset the settings cache."""
    for key in list(os.environ):
        if key.startswith("SHIPWRIGHT_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("SHIPWRIGHT_LOG_LEVEL", "ERROR")
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()
