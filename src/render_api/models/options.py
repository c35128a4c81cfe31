"""Per-request page options shared by every endpoint."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Completion conditions accepted on the wire. The puppeteer-style names are
# kept for compatibility with existing callers.
WaitUntil = Literal[
    "load",
    "domcontentloaded",
    "networkidle0",
    "networkidle2",
    "networkidle",
    "commit",
]

# Playwright's load states
PlaywrightWaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]

DEFAULT_TIMEOUT_MS = 60000
DEFAULT_WAIT_UNTIL: WaitUntil = "networkidle2"


class Viewport(BaseModel):
    """Viewport size; applied only when both dimensions are set."""

    width: int | None = Field(None, ge=0)
    height: int | None = Field(None, ge=0)

    @property
    def is_complete(self) -> bool:
        return bool(self.width) and bool(self.height)


class PageOptions(BaseModel):
    """Presentation and network settings for a freshly created page."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    viewport: Viewport | None = Field(default_factory=lambda: Viewport(width=1280, height=720))
    user_agent: str | None = Field(None, alias="userAgent")
    extra_headers: dict[str, str] | None = Field(None, alias="extraHeaders")
    timeout_ms: float = Field(DEFAULT_TIMEOUT_MS, alias="timeoutMs", ge=0)
    wait_until: WaitUntil = Field(DEFAULT_WAIT_UNTIL, alias="waitUntil")


class NavigationSettings(BaseModel):
    """Effective timeout and completion condition for navigation and steps."""

    model_config = ConfigDict(frozen=True)

    timeout_ms: float = DEFAULT_TIMEOUT_MS
    wait_until: PlaywrightWaitUntil = "networkidle"
