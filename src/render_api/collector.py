"""Result capture: markup, images, PDFs and the composite run result."""

import base64
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError

from render_api.errors import CaptureError
from render_api.models.requests import ImageType, ResultSpec
from render_api.models.results import CapturedImage, RunResult

if TYPE_CHECKING:
    from playwright.async_api import Page

IMAGE_MIME_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpeg": "image/jpeg",
}

# JPEG quality used by /run when the caller gives none
DEFAULT_RUN_JPEG_QUALITY = 80


async def capture_markup(page: "Page") -> str:
    """Return the full serialized document."""
    try:
        return await page.content()
    except PlaywrightError as e:
        raise CaptureError("Failed to read page content", cause=e) from e


async def capture_image(
    page: "Page",
    full_page: bool = True,
    image_type: ImageType = "png",
    quality: int | None = None,
) -> CapturedImage:
    """Render the viewport or the full scrollable page.

    Args:
        page: Page to capture
        full_page: Capture the whole scrollable document instead of the viewport
        image_type: 'png' or 'jpeg'
        quality: JPEG quality 0-100, ignored for PNG

    Returns:
        Image bytes with their mime type
    """
    image_type = "jpeg" if image_type == "jpeg" else "png"
    screenshot_options: dict[str, Any] = {"full_page": full_page, "type": image_type}
    if image_type == "jpeg" and quality is not None:
        screenshot_options["quality"] = quality

    try:
        data = await page.screenshot(**screenshot_options)
    except PlaywrightError as e:
        raise CaptureError("Failed to capture screenshot", cause=e) from e

    return CapturedImage(data=data, mime=IMAGE_MIME_TYPES[image_type])


async def render_pdf(page: "Page", format: str = "A4", print_background: bool = True) -> bytes:
    """Print the page to PDF."""
    try:
        return await page.pdf(format=format, print_background=print_background)
    except PlaywrightError as e:
        raise CaptureError("Failed to render PDF", cause=e) from e


async def collect(
    page: "Page",
    spec: ResultSpec | None = None,
    eval_results: list[Any] | None = None,
) -> RunResult:
    """Assemble the composite result after all steps succeeded."""
    spec = spec or ResultSpec()

    try:
        final_url = page.url
        title = await page.title()
    except PlaywrightError as e:
        raise CaptureError("Failed to read page state", cause=e) from e

    result = RunResult(final_url=final_url, title=title)

    if spec.content:
        result.content = await capture_markup(page)

    if spec.screenshot and spec.screenshot.enabled:
        shot = spec.screenshot
        quality = None
        if shot.type == "jpeg":
            quality = shot.quality if shot.quality is not None else DEFAULT_RUN_JPEG_QUALITY
        image = await capture_image(page, full_page=shot.full_page, image_type=shot.type, quality=quality)
        result.screenshot_base64 = base64.b64encode(image.data).decode("ascii")
        result.screenshot_mime = image.mime

    if eval_results:
        result.eval_results = list(eval_results)

    return result
