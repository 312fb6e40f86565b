"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables and config lookup for each test.

    Config files are searched in XDG_CONFIG_HOME and the working directory,
    so both point into the test's temporary directory.
    """
    original_env = os.environ.copy()

    for name in ("ITEMSEARCH_MODE", "ITEMSEARCH_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)

    yield

    os.environ.clear()
    os.environ.update(original_env)
