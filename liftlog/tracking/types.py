"""Types shared by the session store and the completion tracker."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from liftlog.errors import ValidationError


@dataclass(frozen=True)
class SlotKey:
    """Address of one (user, plan, week, day) slot.

    week_id and day_id are caller-defined and are not checked against the
    plan document.

    Raises:
        ValidationError: If any component is missing or blank
    """

    user_id: str
    plan_id: int
    week_id: str
    day_id: str

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("user_id", "plan_id", "week_id", "day_id")
            if getattr(self, name) is None or str(getattr(self, name)).strip() == ""
        ]
        if missing:
            raise ValidationError(f"Missing slot fields: {', '.join(missing)}")

    def as_row(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "plan_id": self.plan_id,
            "week_id": self.week_id,
            "day_id": self.day_id,
        }


@dataclass(frozen=True)
class SessionEntry:
    """Saved session with its slot coordinates."""

    plan_id: int
    week_id: str
    day_id: str
    updated_at: datetime
    data: Any


@dataclass(frozen=True)
class CompletedSlot:
    week_id: str
    day_id: str


@dataclass(frozen=True)
class CompletionMark:
    """Most recent completion under a plan."""

    week_id: str
    day_id: str
    completed_at: datetime
