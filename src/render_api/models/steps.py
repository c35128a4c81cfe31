"""Action step variants for the scripted ``/run`` endpoint.

Each step is a JSON object tagged by its ``action`` field. The set of
actions is closed: anything not listed in ``STEP_TYPES`` is rejected.
"""

from typing import Any, Literal, Union

from pydantic import ConfigDict, Field, StrictStr, ValidationError

from render_api.errors import StepConfigurationError, UnknownActionError
from render_api.models.base import WireModel
from render_api.models.options import WaitUntil


class _Step(WireModel):
    model_config = ConfigDict(frozen=True)


class WaitForSelectorStep(_Step):
    """Block until an element matching ``selector`` is attached."""

    action: Literal["waitForSelector"] = "waitForSelector"
    selector: StrictStr
    timeout_ms: float | None = Field(None, alias="timeoutMs", ge=0)


class ClickStep(_Step):
    action: Literal["click"] = "click"
    selector: StrictStr


class TypeStep(_Step):
    """Send ``text`` as individual keystrokes."""

    action: Literal["type"] = "type"
    selector: StrictStr
    text: StrictStr = ""
    delay: float = Field(0, ge=0)


class PressStep(_Step):
    action: Literal["press"] = "press"
    key: StrictStr


class WaitForTimeoutStep(_Step):
    action: Literal["waitForTimeout"] = "waitForTimeout"
    ms: float = Field(0, ge=0)


class WaitForNavigationStep(_Step):
    action: Literal["waitForNavigation"] = "waitForNavigation"
    wait_until: WaitUntil | None = Field(None, alias="waitUntil")
    timeout_ms: float | None = Field(None, alias="timeoutMs", ge=0)


class EvaluateStep(_Step):
    """Run ``fn`` as a function body in the page and keep its return value."""

    action: Literal["evaluate"] = "evaluate"
    fn: StrictStr


ActionStep = Union[
    WaitForSelectorStep,
    ClickStep,
    TypeStep,
    PressStep,
    WaitForTimeoutStep,
    WaitForNavigationStep,
    EvaluateStep,
]

STEP_TYPES: dict[str, type[_Step]] = {
    "waitForSelector": WaitForSelectorStep,
    "click": ClickStep,
    "type": TypeStep,
    "press": PressStep,
    "waitForTimeout": WaitForTimeoutStep,
    "waitForNavigation": WaitForNavigationStep,
    "evaluate": EvaluateStep,
}


def parse_step(raw: Any, index: int | None = None) -> ActionStep | None:
    """Turn a raw step object into its typed variant.

    Returns None for entries without an action tag, which are skipped.

    Raises:
        UnknownActionError: The action tag is not one of STEP_TYPES.
        StepConfigurationError: A known action has missing or mistyped fields.
    """
    if not isinstance(raw, dict):
        return None

    action = raw.get("action")
    if not action:
        return None

    if not isinstance(action, str) or action not in STEP_TYPES:
        raise UnknownActionError(str(action), index=index)

    if action == "evaluate" and not isinstance(raw.get("fn"), str):
        raise StepConfigurationError("evaluate.fn must be a string", index=index, action=action)

    try:
        return STEP_TYPES[action].model_validate(raw)
    except ValidationError as e:
        raise StepConfigurationError(
            "invalid step fields", index=index, action=action, cause=e
        ) from e
