"""Shared fixtures: fake Playwright objects, no real browser needed."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from render_api.config import Config, RecordingConfig, ServerConfig
from render_api.models.options import NavigationSettings

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
JPEG_BYTES = b"\xff\xd8\xff\xe0fake"
PDF_BYTES = b"%PDF-1.4 fake"


def make_page(
    url: str = "https://example.com/",
    title: str = "Example Domain",
    html: str = "<html><head><title>Example Domain</title></head><body></body></html>",
) -> AsyncMock:
    """Build a Playwright Page stand-in.

    Async page methods are AsyncMocks; the sync ones (timeouts, url,
    expect_navigation) are plain attributes or MagicMocks.
    """
    page = AsyncMock()
    page.url = url
    page.title = AsyncMock(return_value=title)
    page.content = AsyncMock(return_value=html)
    page.screenshot = AsyncMock(return_value=PNG_BYTES)
    page.pdf = AsyncMock(return_value=PDF_BYTES)
    page.evaluate = AsyncMock(return_value=None)
    page.set_default_timeout = MagicMock()
    page.set_default_navigation_timeout = MagicMock()
    page.keyboard = AsyncMock()

    navigation = MagicMock()
    navigation.__aenter__ = AsyncMock(return_value=None)
    navigation.__aexit__ = AsyncMock(return_value=False)
    page.expect_navigation = MagicMock(return_value=navigation)
    return page


@pytest.fixture
def page():
    return make_page()


@pytest.fixture
def settings():
    return NavigationSettings(timeout_ms=5000, wait_until="networkidle")


@pytest.fixture
def config(tmp_path):
    return Config(
        server=ServerConfig(max_concurrent_sessions=2),
        recording=RecordingConfig(actions_dir=tmp_path / "actions"),
    )


@pytest.fixture
def browser_stack(page):
    """Patch async_playwright so sessions hand out the fake ``page``."""
    context = AsyncMock()
    context.new_page = AsyncMock(return_value=page)

    browser = AsyncMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = AsyncMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)

    with patch("render_api.session.async_playwright", return_value=starter) as factory:
        yield SimpleNamespace(
            factory=factory,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
        )
