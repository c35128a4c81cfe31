"""Data models for render-api."""

from render_api.models.action_log import ActionEntry, ActionLog
from render_api.models.options import NavigationSettings, PageOptions, Viewport
from render_api.models.requests import (
    ContentRequest,
    PdfRequest,
    ResultSpec,
    RunRequest,
    ScreenshotRequest,
    ScreenshotSpec,
)
from render_api.models.results import CapturedImage, ContentResult, RunResult
from render_api.models.steps import ActionStep, parse_step

__all__ = [
    "ActionEntry",
    "ActionLog",
    "ActionStep",
    "CapturedImage",
    "ContentRequest",
    "ContentResult",
    "NavigationSettings",
    "PageOptions",
    "PdfRequest",
    "ResultSpec",
    "RunRequest",
    "RunResult",
    "ScreenshotRequest",
    "ScreenshotSpec",
    "Viewport",
    "parse_step",
]
