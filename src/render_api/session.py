"""Request-scoped browser sessions."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager, nullcontext
from typing import TYPE_CHECKING, Any, TypeVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from render_api.config import Config
from render_api.errors import SessionSetupError
from render_api.models.options import PageOptions
from render_api.page_setup import build_context_options

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page, Playwright

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionManager:
    """Hands out one fresh browser and page per request.

    Usage:
        manager = SessionManager(config)
        async with manager.session(options) as page:
            await page.goto("https://example.com")

    The browser is closed exactly once when the block exits, whether it
    returned normally or raised. Nothing is pooled or reused between
    requests. ``server.max_concurrent_sessions`` caps how many browsers may
    be alive at once; further requests wait for a slot.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        limit = self.config.server.max_concurrent_sessions
        self._semaphore: asyncio.Semaphore | None = asyncio.Semaphore(limit) if limit > 0 else None
        self._active = 0

    @property
    def active_sessions(self) -> int:
        """Number of browsers currently open."""
        return self._active

    @asynccontextmanager
    async def session(self, options: PageOptions | None = None) -> AsyncIterator["Page"]:
        """Acquire a browser and a single configured page.

        Raises:
            SessionSetupError: The browser or page could not be created.
        """
        async with self._semaphore or nullcontext():
            playwright, browser = await self._launch()
            self._active += 1
            try:
                page = await self._open_page(browser, options)
                yield page
            finally:
                self._active -= 1
                await self._release(playwright, browser)

    async def with_session(
        self,
        body: Callable[["Page"], Awaitable[T]],
        options: PageOptions | None = None,
    ) -> T:
        """Run ``body`` with a fresh page and return its result."""
        async with self.session(options) as page:
            return await body(page)

    async def _launch(self) -> tuple["Playwright", "Browser"]:
        """Start Playwright and launch Chromium."""
        try:
            playwright = await async_playwright().start()
        except Exception as e:
            raise SessionSetupError("Failed to start Playwright", cause=e) from e

        try:
            browser = await playwright.chromium.launch(
                headless=self.config.browser.headless,
                args=self.config.browser.args,
            )
        except Exception as e:
            await _stop_playwright(playwright)
            raise SessionSetupError("Failed to launch browser", cause=e) from e

        return playwright, browser

    async def _open_page(self, browser: "Browser", options: PageOptions | None) -> "Page":
        context_options: dict[str, Any] = build_context_options(options)
        try:
            context = await browser.new_context(**context_options)
            return await context.new_page()
        except PlaywrightError as e:
            raise SessionSetupError("Failed to open page", cause=e) from e

    async def _release(self, playwright: "Playwright", browser: "Browser") -> None:
        try:
            await browser.close()
        except Exception:
            logger.exception("Failed to close browser")
        await _stop_playwright(playwright)


async def _stop_playwright(playwright: "Playwright") -> None:
    try:
        await playwright.stop()
    except Exception:
        logger.exception("Failed to stop Playwright")
