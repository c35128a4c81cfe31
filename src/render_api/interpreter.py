"""Sequential interpreter for scripted ``/run`` steps."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout

from render_api.errors import SelectorTimeoutError, StepError, StepExecutionError, UnknownActionError
from render_api.models.options import NavigationSettings
from render_api.models.steps import (
    ActionStep,
    ClickStep,
    EvaluateStep,
    PressStep,
    TypeStep,
    WaitForNavigationStep,
    WaitForSelectorStep,
    WaitForTimeoutStep,
    parse_step,
)
from render_api.navigation import wait_for_next_navigation
from render_api.page_setup import to_playwright_wait_until
from render_api.recording import ActionLogger, RequestRecorder

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

StepHandler = Callable[["Page", Any, NavigationSettings, int], Awaitable[Any]]


def script_as_function(source: str) -> str:
    """Wrap a script body so Playwright invokes it as a function."""
    return f"() => {{\n{source}\n}}"


class StepInterpreter:
    """Executes action steps one at a time against a navigated page.

    The first failing step aborts the sequence; its error propagates to the
    caller. Return values of ``evaluate`` steps are collected in order.
    """

    def __init__(self, recorder: RequestRecorder | None = None):
        self.recorder = recorder
        self._handlers: dict[str, StepHandler] = {
            "waitForSelector": self._wait_for_selector,
            "click": self._click,
            "type": self._type,
            "press": self._press,
            "waitForTimeout": self._wait_for_timeout,
            "waitForNavigation": self._wait_for_navigation,
            "evaluate": self._evaluate,
        }

    async def run(
        self,
        page: "Page",
        steps: Sequence[Any],
        settings: NavigationSettings,
    ) -> list[Any]:
        """Run ``steps`` in order.

        Args:
            page: Page that has already been navigated
            steps: Raw step objects as received from the caller
            settings: Inherited timeout and completion condition

        Returns:
            Results of evaluate steps, in execution order
        """
        eval_results: list[Any] = []

        for index, raw in enumerate(steps):
            # Parsed lazily so earlier steps run before a later bad one is seen
            step = parse_step(raw, index=index)
            if step is None:
                logger.debug("Skipping step %d without action", index)
                continue

            result = await self.execute(page, step, settings, index)
            if isinstance(step, EvaluateStep):
                eval_results.append(result)

        return eval_results

    async def execute(
        self,
        page: "Page",
        step: ActionStep,
        settings: NavigationSettings,
        index: int,
    ) -> Any:
        """Execute a single parsed step."""
        handler = self._handlers.get(step.action)
        if handler is None:
            raise UnknownActionError(step.action, index=index)

        async with ActionLogger(
            self.recorder,
            step.action,
            index=index,
            selector=getattr(step, "selector", None),
            value=_describe_value(step),
        ):
            try:
                return await handler(page, step, settings, index)
            except StepError:
                raise
            except PlaywrightError as e:
                raise StepExecutionError(
                    _first_line(e), index=index, action=step.action, cause=e
                ) from e

    async def _wait_for_selector(
        self, page: "Page", step: WaitForSelectorStep, settings: NavigationSettings, index: int
    ) -> None:
        timeout = step.timeout_ms if step.timeout_ms is not None else settings.timeout_ms
        try:
            await page.wait_for_selector(step.selector, state="attached", timeout=timeout)
        except PlaywrightTimeout as e:
            raise SelectorTimeoutError(
                f"{step.selector!r} did not appear within {timeout:g} ms",
                index=index,
                action=step.action,
                cause=e,
            ) from e

    async def _click(self, page: "Page", step: ClickStep, settings: NavigationSettings, index: int) -> None:
        await page.click(step.selector)

    async def _type(self, page: "Page", step: TypeStep, settings: NavigationSettings, index: int) -> None:
        await page.type(step.selector, step.text, delay=step.delay)

    async def _press(self, page: "Page", step: PressStep, settings: NavigationSettings, index: int) -> None:
        await page.keyboard.press(step.key)

    async def _wait_for_timeout(
        self, page: "Page", step: WaitForTimeoutStep, settings: NavigationSettings, index: int
    ) -> None:
        await asyncio.sleep(step.ms / 1000)

    async def _wait_for_navigation(
        self, page: "Page", step: WaitForNavigationStep, settings: NavigationSettings, index: int
    ) -> None:
        wait_until = (
            to_playwright_wait_until(step.wait_until) if step.wait_until else settings.wait_until
        )
        timeout = step.timeout_ms if step.timeout_ms is not None else settings.timeout_ms
        await wait_for_next_navigation(page, wait_until, timeout, index=index)

    async def _evaluate(self, page: "Page", step: EvaluateStep, settings: NavigationSettings, index: int) -> Any:
        return await page.evaluate(script_as_function(step.fn))


def _describe_value(step: ActionStep) -> str | None:
    if isinstance(step, TypeStep):
        return step.text
    if isinstance(step, PressStep):
        return step.key
    if isinstance(step, WaitForTimeoutStep):
        return f"{step.ms:g}"
    if isinstance(step, EvaluateStep):
        return step.fn[:100]
    return None


def _first_line(error: BaseException) -> str:
    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__
