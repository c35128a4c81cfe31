"""Per-request page configuration."""

from typing import TYPE_CHECKING, Any

from render_api.models.options import NavigationSettings, PageOptions, PlaywrightWaitUntil, WaitUntil

if TYPE_CHECKING:
    from playwright.async_api import Page


# Playwright has a single network-idle state (no connections for 500 ms);
# both puppeteer variants map onto it.
_WAIT_UNTIL_MAP: dict[str, PlaywrightWaitUntil] = {
    "load": "load",
    "domcontentloaded": "domcontentloaded",
    "networkidle0": "networkidle",
    "networkidle2": "networkidle",
    "networkidle": "networkidle",
    "commit": "commit",
}


def to_playwright_wait_until(wait_until: WaitUntil) -> PlaywrightWaitUntil:
    """Map a wire completion condition to Playwright's load state."""
    return _WAIT_UNTIL_MAP[wait_until]


def build_context_options(options: PageOptions | None = None) -> dict[str, Any]:
    """Build ``browser.new_context`` keyword arguments from page options.

    The user agent is a context-level setting in Playwright, so identity and
    headers are applied when the context is created rather than afterwards.
    """
    options = options or PageOptions()
    context_options: dict[str, Any] = {}

    if options.viewport and options.viewport.is_complete:
        context_options["viewport"] = {
            "width": options.viewport.width,
            "height": options.viewport.height,
        }
    if options.user_agent:
        context_options["user_agent"] = options.user_agent
    if options.extra_headers:
        context_options["extra_http_headers"] = dict(options.extra_headers)

    return context_options


async def configure_page(page: "Page", options: PageOptions | None = None) -> NavigationSettings:
    """Apply timeouts to a fresh page and return the effective settings.

    Args:
        page: Newly created Playwright page
        options: Caller-supplied options (defaults when None)

    Returns:
        Timeout and completion condition for navigation and steps
    """
    options = options or PageOptions()
    settings = NavigationSettings(
        timeout_ms=options.timeout_ms,
        wait_until=to_playwright_wait_until(options.wait_until),
    )

    page.set_default_timeout(settings.timeout_ms)
    page.set_default_navigation_timeout(settings.timeout_ms)

    return settings
