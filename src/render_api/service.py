"""Render pipeline shared by all endpoints.

Every operation follows the same path: validate the target, open a session,
configure the page, navigate, do the endpoint-specific work, and close the
session. ``run`` adds the step interpreter between navigation and capture.
"""

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from render_api.collector import capture_image, capture_markup, collect, render_pdf
from render_api.config import Config
from render_api.interpreter import StepInterpreter
from render_api.models.options import NavigationSettings, PageOptions
from render_api.models.requests import ContentRequest, PdfRequest, RunRequest, ScreenshotRequest
from render_api.models.results import CapturedImage, ContentResult, RunResult
from render_api.navigation import navigate
from render_api.page_setup import configure_page
from render_api.recording import RequestRecorder
from render_api.session import SessionManager
from render_api.validation import require_target

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


class RenderService:
    """Executes render requests, one isolated browser per call."""

    def __init__(self, config: Config | None = None, session_manager: SessionManager | None = None):
        self.config = config or Config()
        self.sessions = session_manager or SessionManager(self.config)

    async def fetch_content(self, request: ContentRequest) -> ContentResult:
        """Load a page and return its title and markup."""
        async with self._navigated_page("content", request.url, request.options) as (page, _, _):
            title = await page.title()
            html = await capture_markup(page)
            return ContentResult(url=request.url, title=title, html=html)

    async def capture_screenshot(self, request: ScreenshotRequest) -> CapturedImage:
        """Load a page and render it as PNG or JPEG."""
        async with self._navigated_page("screenshot", request.url, request.options) as (page, _, _):
            return await capture_image(
                page,
                full_page=request.full_page,
                image_type=request.type,
                quality=request.quality,
            )

    async def render_pdf(self, request: PdfRequest) -> bytes:
        """Load a page and print it to PDF."""
        async with self._navigated_page("pdf", request.url, request.options) as (page, _, _):
            return await render_pdf(page, format=request.format, print_background=request.print_background)

    async def run(self, request: RunRequest) -> RunResult:
        """Load a page, execute the scripted steps and collect the result."""
        async with self._navigated_page("run", request.url, request.options) as (page, settings, recorder):
            interpreter = StepInterpreter(recorder)
            eval_results = await interpreter.run(page, request.steps, settings)
            return await collect(page, request.result, eval_results)

    @asynccontextmanager
    async def _navigated_page(
        self,
        endpoint: str,
        url: str,
        options: PageOptions | None,
    ) -> AsyncIterator[tuple["Page", NavigationSettings, RequestRecorder]]:
        url = require_target(url)
        request_id = str(uuid.uuid4())[:8]
        recorder = RequestRecorder(request_id, self.config)
        started = time.monotonic()
        logger.info("[%s] %s %s", request_id, endpoint, url)

        try:
            async with self.sessions.session(options) as page:
                settings = await configure_page(page, options)
                await navigate(page, url, settings, recorder)
                yield page, settings, recorder
        except Exception as e:
            logger.warning(
                "[%s] %s failed after %.0f ms: %s",
                request_id,
                endpoint,
                (time.monotonic() - started) * 1000,
                e,
            )
            raise

        logger.info("[%s] %s done in %.0f ms", request_id, endpoint, (time.monotonic() - started) * 1000)
