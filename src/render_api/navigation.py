"""Page navigation with timeout and completion-condition handling."""

from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout

from render_api.errors import NavigationError, NavigationTimeoutError, StepExecutionError
from render_api.models.options import NavigationSettings, PlaywrightWaitUntil
from render_api.recording import ActionLogger, RequestRecorder

if TYPE_CHECKING:
    from playwright.async_api import Page


async def navigate(
    page: "Page",
    url: str,
    settings: NavigationSettings,
    recorder: RequestRecorder | None = None,
) -> None:
    """Load ``url`` and wait for the configured completion condition.

    Raises:
        NavigationError: The load failed or timed out.
    """
    async with ActionLogger(recorder, "goto", url=url, wait_until=settings.wait_until):
        try:
            await page.goto(url, wait_until=settings.wait_until, timeout=settings.timeout_ms)
        except PlaywrightTimeout as e:
            raise NavigationError(
                url, cause=e, message=f"Navigation to {url} timed out after {settings.timeout_ms:g} ms"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(url, cause=e) from e


async def wait_for_next_navigation(
    page: "Page",
    wait_until: PlaywrightWaitUntil,
    timeout_ms: float,
    index: int | None = None,
) -> None:
    """Block until the page's next navigation completes.

    Raises:
        NavigationTimeoutError: No navigation completed within ``timeout_ms``.
        StepExecutionError: The navigation itself failed.
    """
    try:
        async with page.expect_navigation(wait_until=wait_until, timeout=timeout_ms):
            pass
    except PlaywrightTimeout as e:
        raise NavigationTimeoutError(
            f"no navigation within {timeout_ms:g} ms",
            index=index,
            action="waitForNavigation",
            cause=e,
        ) from e
    except PlaywrightError as e:
        raise StepExecutionError(
            "navigation failed", index=index, action="waitForNavigation", cause=e
        ) from e
