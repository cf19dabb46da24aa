"""Completion tracker.

A slot is completed when a completion row exists for it. Marking upserts the
row with a fresh timestamp, unmarking deletes it (so unmarking erases the
slot's completion history).
"""

from collections.abc import Callable
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import delete, select

from liftlog.db.models import Completion
from liftlog.db.session import SessionScope, get_session
from liftlog.db.upsert import upsert
from liftlog.tracking.types import CompletedSlot, CompletionMark, SlotKey


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CompletionTracker:
    def __init__(self, session_scope: SessionScope = get_session, clock: Callable[[], datetime] = _utcnow) -> None:
        self._session_scope = session_scope
        self._clock = clock

    def set_completed(self, slot: SlotKey, completed: bool) -> None:
        """Mark or unmark a slot as completed.

        Marking an already completed slot moves its timestamp to now.
        Unmarking a slot that is not completed is a no-op.
        """
        with self._session_scope() as db:
            if completed:
                upsert(
                    db,
                    Completion,
                    {**slot.as_row(), "completed_at": self._clock()},
                    key=["user_id", "plan_id", "week_id", "day_id"],
                    update=["completed_at"],
                )
            else:
                db.execute(
                    delete(Completion).where(
                        Completion.user_id == slot.user_id,
                        Completion.plan_id == slot.plan_id,
                        Completion.week_id == slot.week_id,
                        Completion.day_id == slot.day_id,
                    )
                )
        logger.info(
            "Completion updated",
            user_id=slot.user_id,
            plan_id=slot.plan_id,
            week_id=slot.week_id,
            day_id=slot.day_id,
            completed=completed,
        )

    def get_status(self, slot: SlotKey) -> bool:
        with self._session_scope() as db:
            found = db.execute(
                select(Completion.completed_at).where(
                    Completion.user_id == slot.user_id,
                    Completion.plan_id == slot.plan_id,
                    Completion.week_id == slot.week_id,
                    Completion.day_id == slot.day_id,
                )
            ).first()
        return found is not None

    def get_last(self, user_id: str, plan_id: int) -> CompletionMark | None:
        """Get the most recently completed slot under a plan.

        Ties on completed_at resolve to the greatest (week_id, day_id).
        """
        with self._session_scope() as db:
            row = db.execute(
                select(Completion.week_id, Completion.day_id, Completion.completed_at)
                .where(Completion.user_id == user_id, Completion.plan_id == plan_id)
                .order_by(
                    Completion.completed_at.desc(),
                    Completion.week_id.desc(),
                    Completion.day_id.desc(),
                )
                .limit(1)
            ).first()
        if row is None:
            return None
        return CompletionMark(week_id=row.week_id, day_id=row.day_id, completed_at=row.completed_at)

    def get_all(self, user_id: str, plan_id: int) -> list[CompletedSlot]:
        """List completed slots under a plan, oldest completion first."""
        with self._session_scope() as db:
            rows = db.execute(
                select(Completion.week_id, Completion.day_id)
                .where(Completion.user_id == user_id, Completion.plan_id == plan_id)
                .order_by(
                    Completion.completed_at.asc(),
                    Completion.week_id.asc(),
                    Completion.day_id.asc(),
                )
            ).all()
        return [CompletedSlot(week_id=row.week_id, day_id=row.day_id) for row in rows]
