"""Action recording for scripted runs."""

import logging
from datetime import datetime
from pathlib import Path

import aiofiles

from render_api.config import Config
from render_api.errors import RenderError
from render_api.models.action_log import ActionEntry, ActionLog

logger = logging.getLogger(__name__)


class RequestRecorder:
    """Records the actions executed for a single request.

    Entries are always kept in memory. When ``record_actions`` is enabled they
    are also appended to ``<actions_dir>/<request_id>.jsonl``.
    """

    def __init__(self, request_id: str, config: Config | None = None):
        self.request_id = request_id
        self.config = config or Config()
        self.action_log = ActionLog(request_id=request_id)
        self._persist = self.config.recording.record_actions

        if self._persist:
            self.config.recording.actions_dir.mkdir(parents=True, exist_ok=True)

    @property
    def actions_path(self) -> Path:
        """Path to the action log file for this request."""
        return self.config.recording.actions_dir / f"{self.request_id}.jsonl"

    async def log_action(
        self,
        action: str,
        index: int | None = None,
        selector: str | None = None,
        value: str | None = None,
        url: str | None = None,
        duration_ms: float | None = None,
        success: bool = True,
        error: str | None = None,
        **metadata,
    ) -> ActionEntry:
        """Record an executed action.

        Args:
            action: Action type (e.g. 'goto', 'click', 'evaluate')
            index: Position of the step in the request's step list
            selector: CSS selector if applicable
            value: Value used (typed text, key, script excerpt)
            url: URL if applicable
            duration_ms: Action duration in milliseconds
            success: Whether the action succeeded
            error: Error message if failed
            **metadata: Additional metadata

        Returns:
            The recorded entry
        """
        entry = ActionEntry(
            request_id=self.request_id,
            index=index,
            action=action,
            selector=selector,
            value=value,
            url=url,
            duration_ms=duration_ms,
            success=success,
            error=error,
            metadata=metadata,
        )
        self.action_log.add_action(entry)

        logger.debug(
            "[%s] %s %s%s (%.1f ms)",
            self.request_id,
            action,
            selector or url or "",
            "" if success else f" failed: {error}",
            duration_ms or 0.0,
        )

        if self._persist:
            async with aiofiles.open(self.actions_path, "a") as f:
                await f.write(entry.model_dump_json() + "\n")

        return entry

    async def load_action_log(self) -> ActionLog | None:
        """Load the persisted action log, if any."""
        if not self.actions_path.exists():
            return None

        action_log = ActionLog(request_id=self.request_id)

        async with aiofiles.open(self.actions_path) as f:
            async for line in f:
                line = line.strip()
                if line:
                    action_log.add_action(ActionEntry.model_validate_json(line))

        return action_log


class ActionLogger:
    """Context manager for timing and recording actions.

    Exceptions raised inside the block are recorded and then propagate.
    """

    def __init__(
        self,
        recorder: RequestRecorder | None,
        action: str,
        index: int | None = None,
        selector: str | None = None,
        value: str | None = None,
        url: str | None = None,
        **metadata,
    ):
        self.recorder = recorder
        self.action = action
        self.index = index
        self.selector = selector
        self.value = value
        self.url = url
        self.metadata = metadata
        self._start_time: datetime | None = None

    async def __aenter__(self) -> "ActionLogger":
        self._start_time = datetime.utcnow()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.recorder is None:
            return

        duration_ms = None
        if self._start_time:
            duration_ms = (datetime.utcnow() - self._start_time).total_seconds() * 1000

        await self.recorder.log_action(
            action=self.action,
            index=self.index,
            selector=self.selector,
            value=self.value,
            url=self.url,
            duration_ms=duration_ms,
            success=exc_val is None,
            error=_error_text(exc_val),
            **self.metadata,
        )


def _error_text(error: BaseException | None) -> str | None:
    if error is None:
        return None
    if isinstance(error, RenderError):
        return error.details
    return str(error)
