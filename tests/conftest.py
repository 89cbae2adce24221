"""Shared fixtures for unit and e2e tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from julius_e2e.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def local_env(monkeypatch):
    """Force the local settings profile regardless of the CI environment."""
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("JULIUS_E2E_ENV", raising=False)
    for name in ("JULIUS_E2E_RUN__ENABLED", "JULIUS_E2E_BROWSER__HEADLESS", "JULIUS_E2E_BROWSER__NAME"):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Temp data
# ---------------------------------------------------------------------------


@pytest.fixture()
def temp_store(tmp_path: Path):
    """A ``TempStore`` backed by a file in the test's tmp dir."""
    from julius_e2e.testdata.store import TempStore

    return TempStore(tmp_path / "temp_data.json")


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """Empty data directory for credential and data-file tests."""
    path = tmp_path / "data"
    path.mkdir()
    return path


# ---------------------------------------------------------------------------
# Mock Playwright page
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_page():
    """Return a ``MagicMock`` standing in for a Playwright ``Page``.

    The page reports itself open; every other call returns a MagicMock.
    """
    page = MagicMock(name="page")
    page.is_closed.return_value = False
    page.url = "https://app.juliusdev.net/"
    page.title.return_value = "Julius"
    return page


@pytest.fixture()
def fast_helper_settings():
    """Helper tuning with small numbers so call arguments are easy to assert."""
    from julius_e2e.settings.config import HelperSettings

    return HelperSettings(
        attempts=3,
        default_timeout_ms=9_000,
        attempt_timeout_cap_ms=2_000,
        settle_timeout_ms=500,
        type_delay_ms=10,
    )


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: real-browser journeys against the Julius app")
    config.addinivalue_line("markers", "slow: journeys that get a longer default Playwright timeout")


# ---------------------------------------------------------------------------
# Page-object collaborators
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_helper():
    """``ActionHelper`` stand-in; every wait and action succeeds immediately."""
    from julius_e2e.browser.helper import ActionHelper

    helper = MagicMock(spec=ActionHelper)
    helper.is_page_open.return_value = True
    helper.is_visible.return_value = True
    return helper


@pytest.fixture()
def local_settings(local_env):
    """Settings built from the shipped default profile."""
    from julius_e2e.settings.config import Settings

    return Settings()


@pytest.fixture()
def deps(mock_page, mock_helper, local_settings):
    """Positional arguments every page object takes."""
    return mock_page, mock_helper, local_settings
