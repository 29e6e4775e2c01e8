"""Pytest hooks and fixtures."""

import os

import pytest

from wirecall.config.access import clear_config_cache


@pytest.fixture(autouse=True)
def _isolated_home(monkeypatch, tmp_path):
    """Keep ~/.wirecall and WIRECALL_* env vars out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("WIRECALL_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
