"""Per-view context for the report console."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from report_console.core.schema import CurrentUser

if TYPE_CHECKING:  # pragma: no cover
    from report_console.application.polling import JobListPoller

NotificationLevel = Literal["success", "error", "info"]


@dataclass(slots=True, frozen=True)
class Notification:
    """Toast-style message shown to the operator."""

    level: NotificationLevel
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"level": self.level, "message": self.message}


@dataclass(slots=True)
class ConsoleSession:
    """State owned by one mounted report view.

    Created on mount and discarded on unmount; nothing here outlives the
    view.
    """

    poller: JobListPoller
    current_user: CurrentUser | None = None
    notifications: list[Notification] = field(default_factory=list)
    creating: bool = False

    @property
    def has_user(self) -> bool:
        return self.current_user is not None
