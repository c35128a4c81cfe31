"""Pydantic models for per-request action logs."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ActionEntry(BaseModel):
    """Single action executed against a page."""

    timestamp: datetime = Field(default_factory=datetime.utcnow)
    request_id: str | None = None
    index: int | None = None
    action: str
    selector: str | None = None
    value: str | None = None
    url: str | None = None
    duration_ms: float | None = None
    success: bool = True
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ActionLog(BaseModel):
    """Collection of actions for one request."""

    request_id: str
    started_at: datetime = Field(default_factory=datetime.utcnow)
    actions: list[ActionEntry] = Field(default_factory=list)

    def add_action(self, action: ActionEntry) -> None:
        """Add an action to the log."""
        self.actions.append(action)

    @property
    def failed(self) -> list[ActionEntry]:
        return [a for a in self.actions if not a.success]
