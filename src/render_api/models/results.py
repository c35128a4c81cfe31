"""Response bodies."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentResult(BaseModel):
    url: str
    title: str
    html: str


class CapturedImage(BaseModel):
    """Rendered image bytes plus their mime type."""

    data: bytes
    mime: str


class RunResult(BaseModel):
    """Composite outcome of a scripted run."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    final_url: str = Field(alias="finalUrl")
    title: str
    content: str | None = None
    screenshot_base64: str | None = Field(None, alias="screenshotBase64")
    screenshot_mime: str | None = Field(None, alias="screenshotMime")
    eval_results: list[Any] | None = Field(None, alias="evalResults")

    def to_response(self) -> dict[str, Any]:
        """Wire form: camelCase keys, optional parts omitted when absent.

        Page values are made JSON-safe: dates become ISO strings and
        non-finite numbers become null.
        """
        return _finite(self.model_dump(mode="json", by_alias=True, exclude_none=True))


def _finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_finite(v) for v in value]
    return value
