"""Tests for Pydantic models and step parsing."""

import json
import math
from datetime import datetime

import pytest
from pydantic import ValidationError

from render_api.errors import StepConfigurationError, UnknownActionError
from render_api.models import (
    ActionEntry,
    ActionLog,
    PageOptions,
    RunRequest,
    RunResult,
    ScreenshotRequest,
    parse_step,
)
from render_api.models.steps import (
    ClickStep,
    EvaluateStep,
    PressStep,
    TypeStep,
    WaitForNavigationStep,
    WaitForSelectorStep,
    WaitForTimeoutStep,
)


class TestParseStep:
    def test_wait_for_selector(self):
        step = parse_step({"action": "waitForSelector", "selector": "#a", "timeoutMs": 1500})
        assert isinstance(step, WaitForSelectorStep)
        assert step.selector == "#a"
        assert step.timeout_ms == 1500

    def test_type_defaults(self):
        step = parse_step({"action": "type", "selector": "#q"})
        assert isinstance(step, TypeStep)
        assert step.text == ""
        assert step.delay == 0

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"action": "type", "selector": "#q", "text": None}, TypeStep(selector="#q")),
            ({"action": "type", "selector": "#q", "delay": None}, TypeStep(selector="#q")),
            ({"action": "waitForTimeout", "ms": None}, WaitForTimeoutStep(ms=0)),
            ({"action": "waitForSelector", "selector": "#a", "timeoutMs": None}, WaitForSelectorStep(selector="#a")),
            ({"action": "waitForNavigation", "waitUntil": None, "timeoutMs": None}, WaitForNavigationStep()),
        ],
    )
    def test_null_fields_take_defaults(self, raw, expected):
        assert parse_step(raw, index=0) == expected

    def test_null_required_field_is_configuration_error(self):
        with pytest.raises(StepConfigurationError):
            parse_step({"action": "click", "selector": None})

    def test_other_variants(self):
        assert isinstance(parse_step({"action": "click", "selector": "button"}), ClickStep)
        assert isinstance(parse_step({"action": "press", "key": "Enter"}), PressStep)
        assert parse_step({"action": "waitForTimeout"}) == WaitForTimeoutStep(ms=0)
        nav = parse_step({"action": "waitForNavigation", "waitUntil": "load"})
        assert isinstance(nav, WaitForNavigationStep)
        assert nav.wait_until == "load"
        assert nav.timeout_ms is None
        assert parse_step({"action": "evaluate", "fn": "return 1"}) == EvaluateStep(fn="return 1")

    @pytest.mark.parametrize("raw", [{}, {"action": ""}, {"action": None}, None, "click", 3])
    def test_untagged_entries_are_skipped(self, raw):
        assert parse_step(raw) is None

    def test_unknown_action(self):
        with pytest.raises(UnknownActionError) as exc_info:
            parse_step({"action": "teleport"}, index=2)
        assert "teleport" in str(exc_info.value)
        assert exc_info.value.code == "unknown_action"
        assert exc_info.value.index == 2

    def test_non_string_action_is_unknown(self):
        with pytest.raises(UnknownActionError):
            parse_step({"action": 5})

    @pytest.mark.parametrize("fn", [1, {"body": "return 1"}, None, ["return 1"]])
    def test_evaluate_requires_string_fn(self, fn):
        with pytest.raises(StepConfigurationError) as exc_info:
            parse_step({"action": "evaluate", "fn": fn})
        assert exc_info.value.code == "invalid_step_config"

    def test_missing_selector_is_configuration_error(self):
        with pytest.raises(StepConfigurationError):
            parse_step({"action": "click"})

    def test_negative_duration_is_configuration_error(self):
        with pytest.raises(StepConfigurationError):
            parse_step({"action": "waitForTimeout", "ms": -5})

    def test_unknown_wait_until_is_configuration_error(self):
        with pytest.raises(StepConfigurationError):
            parse_step({"action": "waitForNavigation", "waitUntil": "whenever"})


class TestPageOptions:
    def test_defaults(self):
        options = PageOptions()
        assert options.viewport.width == 1280
        assert options.viewport.height == 720
        assert options.timeout_ms == 60000
        assert options.wait_until == "networkidle2"
        assert options.user_agent is None
        assert options.extra_headers is None

    def test_camel_case_aliases(self):
        options = PageOptions.model_validate({
            "viewport": {"width": 800, "height": 600},
            "userAgent": "bot/1.0",
            "extraHeaders": {"X-Test": "1"},
            "timeoutMs": 1000,
            "waitUntil": "load",
        })
        assert options.viewport.width == 800
        assert options.user_agent == "bot/1.0"
        assert options.extra_headers == {"X-Test": "1"}
        assert options.timeout_ms == 1000
        assert options.wait_until == "load"

    def test_rejects_unknown_wait_until(self):
        with pytest.raises(ValidationError):
            PageOptions.model_validate({"waitUntil": "eventually"})

    def test_viewport_completeness(self):
        options = PageOptions.model_validate({"viewport": {"width": 800}})
        assert options.viewport.is_complete is False


class TestRequests:
    def test_run_request_defaults(self):
        req = RunRequest.model_validate({"url": "https://example.com"})
        assert req.steps == []
        assert req.result.content is False
        assert req.result.screenshot is None
        assert req.options == PageOptions()

    def test_null_options_and_result(self):
        req = RunRequest.model_validate({"url": "https://example.com", "options": None, "result": None})
        assert req.options.timeout_ms == 60000
        assert req.result.content is False

    def test_screenshot_request_aliases(self):
        req = ScreenshotRequest.model_validate(
            {"url": "https://example.com", "fullPage": False, "type": "jpeg", "quality": 50}
        )
        assert req.full_page is False
        assert req.type == "jpeg"
        assert req.quality == 50

    def test_null_flags_take_defaults(self):
        shot = ScreenshotRequest.model_validate(
            {"url": "https://example.com", "fullPage": None, "type": None}
        )
        assert shot.full_page is True
        assert shot.type == "png"

        run = RunRequest.model_validate(
            {
                "url": "https://example.com",
                "result": {"content": None, "screenshot": {"enabled": True, "fullPage": None}},
            }
        )
        assert run.result.content is False
        assert run.result.screenshot.full_page is True

    def test_url_is_trimmed(self):
        req = RunRequest.model_validate({"url": " https://example.com/ "})
        assert req.url == "https://example.com/"

    def test_screenshot_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            ScreenshotRequest.model_validate({"url": "https://example.com", "type": "gif"})


class TestRunResult:
    def test_minimal_response_shape(self):
        result = RunResult(final_url="https://example.com/", title="Example")
        assert result.to_response() == {
            "ok": True,
            "finalUrl": "https://example.com/",
            "title": "Example",
        }

    def test_full_response_shape(self):
        result = RunResult(
            final_url="https://example.com/",
            title="Example",
            content="<html></html>",
            screenshot_base64="AAAA",
            screenshot_mime="image/png",
            eval_results=[1, 2],
        )
        data = result.to_response()
        assert data["content"] == "<html></html>"
        assert data["screenshotBase64"] == "AAAA"
        assert data["screenshotMime"] == "image/png"
        assert data["evalResults"] == [1, 2]

    def test_page_values_are_json_safe(self):
        result = RunResult(
            final_url="https://example.com/",
            title="Example",
            eval_results=[datetime(2024, 1, 1), math.inf, {"n": 2.5, "xs": [-math.inf, math.nan]}],
        )
        data = result.to_response()
        assert data["evalResults"][0].startswith("2024-01-01T00:00:00")
        assert data["evalResults"][1] is None
        assert data["evalResults"][2] == {"n": 2.5, "xs": [None, None]}
        json.dumps(data, allow_nan=False)


class TestActionLog:
    def test_entry_defaults(self):
        entry = ActionEntry(action="click")
        assert entry.success is True
        assert entry.error is None
        assert entry.metadata == {}
        assert isinstance(entry.timestamp, datetime)

    def test_failed_entries(self):
        log = ActionLog(request_id="abc")
        log.add_action(ActionEntry(action="goto", url="https://example.com"))
        log.add_action(ActionEntry(action="click", selector="#missing", success=False, error="timeout"))
        assert len(log.actions) == 2
        assert [a.action for a in log.failed] == ["click"]
