"""Request bodies for the HTTP endpoints."""

from typing import Any, Literal

from pydantic import Field, field_validator

from render_api.models.base import WireModel
from render_api.models.options import PageOptions

ImageType = Literal["png", "jpeg"]


class _RenderRequest(WireModel):
    url: str
    options: PageOptions = Field(default_factory=PageOptions)

    @field_validator("url", mode="before")
    @classmethod
    def _strip_url(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class ContentRequest(_RenderRequest):
    pass


class ScreenshotRequest(_RenderRequest):
    full_page: bool = Field(True, alias="fullPage")
    type: ImageType = "png"
    quality: int | None = Field(None, ge=0, le=100)


class PdfRequest(_RenderRequest):
    format: str = "A4"
    print_background: bool = Field(True, alias="printBackground")


class ScreenshotSpec(WireModel):
    """Screenshot settings for the composite ``/run`` result."""

    enabled: bool = False
    full_page: bool = Field(True, alias="fullPage")
    type: ImageType = "png"
    quality: int | None = Field(None, ge=0, le=100)


class ResultSpec(WireModel):
    content: bool = False
    screenshot: ScreenshotSpec | None = None


class RunRequest(_RenderRequest):
    steps: list[Any] = Field(default_factory=list)
    result: ResultSpec = Field(default_factory=ResultSpec)
