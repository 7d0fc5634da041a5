"""Shared fixtures for recorder tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from playwright_recorder.recording.models import (
    click,
    key_press,
    mouse_down,
    mouse_up,
    page_load,
)


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


@pytest.fixture(autouse=True)
def clean_recorder_env(monkeypatch):
    """Keep RECORDER_* variables from the host out of the settings."""
    for name in list(os.environ):
        if name.startswith("RECORDER_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def recorder_settings(tmp_path):
    """Settings with a fast refresh loop and output under tmp_path."""
    from playwright_recorder.config import RecorderSettings

    return RecorderSettings(
        refresh_interval_ms=10,
        output_path=str(tmp_path / "recording.spec.js"),
        _env_file=None,
    )


@pytest.fixture
def simple_template():
    """Minimal code skeleton with the default placeholder."""
    return "test('recorded', async ({ page }) => {\n    // <<CONTENT>>\n});\n"


@pytest.fixture
def login_events():
    """Raw events for a click followed by typing into a field."""
    return [
        mouse_down("#btn"),
        mouse_up("#btn"),
        click("#btn"),
        key_press("#in", "a", "a"),
        key_press("#in", "b", "ab"),
        page_load(),
    ]


@pytest.fixture
def mock_browser():
    """Create a mock RecordingBrowser."""
    browser = MagicMock()
    browser.start = AsyncMock()
    browser.stop = AsyncMock()
    browser.wait_closed = AsyncMock()
    return browser


@pytest.fixture
def mock_page():
    """Create a mock Playwright page."""
    page = AsyncMock()
    page.on = MagicMock()
    page.goto = AsyncMock()
    page.add_script_tag = AsyncMock()
    page.add_init_script = AsyncMock()
    return page


@pytest.fixture
def mock_playwright(mock_page):
    """Create a mock async_playwright() chain down to the page."""
    context = AsyncMock()
    context.new_page = AsyncMock(return_value=mock_page)
    context.expose_binding = AsyncMock()
    context.close = AsyncMock()

    browser = AsyncMock()
    browser.on = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = AsyncMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)

    return {
        "starter": starter,
        "playwright": playwright,
        "browser": browser,
        "context": context,
        "page": mock_page,
    }
