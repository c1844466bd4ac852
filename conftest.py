from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep TRAININGDEMO_* variables from the developer shell out of the tests."""
    from trainingdemo.config import get_settings

    for key in list(os.environ):
        if key.startswith("TRAININGDEMO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TRAININGDEMO_DATABASE_URL", "sqlite:///:memory:")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "graphql: tests that build or execute the GraphQL schema",
    )
