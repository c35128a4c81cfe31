"""Error taxonomy for the render service.

Every error carries a stable ``code`` so callers can tell failure categories
apart without parsing message text.
"""

from typing import Any


class RenderError(Exception):
    """Base class for all errors reported by the service."""

    code = "internal_error"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.cause = cause

    @property
    def details(self) -> str:
        """Stringified underlying cause (or the message itself)."""
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self, error: str | None = None) -> dict[str, Any]:
        return {
            "error": error or self.message,
            "code": self.code,
            "details": self.details,
        }


# Input validation (reported before any session is acquired)


class InvalidRequestError(RenderError):
    code = "invalid_request"
    status_code = 400


class InvalidTargetError(InvalidRequestError):
    code = "invalid_url"


class InvalidStepsError(InvalidRequestError):
    code = "invalid_steps"


class PayloadTooLargeError(InvalidRequestError):
    code = "payload_too_large"
    status_code = 413


# Session / navigation


class SessionSetupError(RenderError):
    code = "session_setup_failed"


class NavigationError(RenderError):
    code = "navigation_failed"

    def __init__(self, target: str, cause: BaseException | None = None, message: str | None = None):
        super().__init__(message or f"Navigation to {target} failed", cause=cause)
        self.target = target


# Step execution


class StepError(RenderError):
    """A step failed; the remaining steps are not executed."""

    code = "step_failed"

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        action: str | None = None,
        cause: BaseException | None = None,
    ):
        if index is not None:
            message = f"Step {index} ({action or '?'}): {message}"
        super().__init__(message, cause=cause)
        self.index = index
        self.action = action


class StepExecutionError(StepError):
    code = "step_failed"


class SelectorTimeoutError(StepError):
    code = "selector_timeout"


class NavigationTimeoutError(StepError):
    code = "navigation_timeout"


class UnknownActionError(StepError):
    code = "unknown_action"

    def __init__(self, action: str, *, index: int | None = None):
        super().__init__(f"Unknown action: {action}", index=index, action=action)


class StepConfigurationError(StepError):
    code = "invalid_step_config"


# Result collection


class CaptureError(RenderError):
    code = "capture_failed"
