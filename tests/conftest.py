"""Pytest configuration helpers for the lens catalog.

``tests.conftest`` is imported before any test module, which makes it the
place to put the repository root on ``sys.path`` and to keep the settings
tests independent from the developer's shell environment.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests import _ensure_repo_on_path

_CATALOG_ENV_VARS = (
    "CATALOG_API_URL",
    "CATALOG_TIMEOUT_SECONDS",
    "CAMERA_DATA_PATH",
    "PREFERENCES_DATABASE_URL",
    "USE_SQLITE",
    "LOG_LEVEL",
)


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Remove every catalog environment variable for the duration of a test."""

    for name in _CATALOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
