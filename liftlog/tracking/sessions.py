"""Session store: one saved workout payload per slot.

Saves are last-write-wins upserts keyed on the slot. No history is kept.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from loguru import logger
from sqlalchemy import select

from liftlog.db.documents import dump_document, load_document
from liftlog.db.models import WorkoutSession
from liftlog.db.session import SessionScope, get_session
from liftlog.db.upsert import upsert
from liftlog.tracking.types import SessionEntry, SlotKey


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    def __init__(self, session_scope: SessionScope = get_session, clock: Callable[[], datetime] = _utcnow) -> None:
        self._session_scope = session_scope
        self._clock = clock

    def save(self, slot: SlotKey, data: Any) -> None:
        """Save the session payload for a slot, replacing any previous one."""
        with self._session_scope() as db:
            upsert(
                db,
                WorkoutSession,
                {**slot.as_row(), "data": dump_document(data if data is not None else {}), "updated_at": self._clock()},
                key=["user_id", "plan_id", "week_id", "day_id"],
                update=["data", "updated_at"],
            )
        logger.info(
            "Session saved",
            user_id=slot.user_id,
            plan_id=slot.plan_id,
            week_id=slot.week_id,
            day_id=slot.day_id,
        )

    def get_last(self, slot: SlotKey) -> Any | None:
        """Get the saved payload for exactly this slot, or None."""
        with self._session_scope() as db:
            raw = db.execute(
                select(WorkoutSession.data).where(
                    WorkoutSession.user_id == slot.user_id,
                    WorkoutSession.plan_id == slot.plan_id,
                    WorkoutSession.week_id == slot.week_id,
                    WorkoutSession.day_id == slot.day_id,
                )
            ).scalar_one_or_none()
        return load_document(raw)

    def list_all(self, user_id: str) -> list[SessionEntry]:
        """List every saved session of a user, most recently updated first."""
        with self._session_scope() as db:
            rows = (
                db.execute(
                    select(WorkoutSession)
                    .where(WorkoutSession.user_id == user_id)
                    .order_by(WorkoutSession.updated_at.desc(), WorkoutSession.id.desc())
                )
                .scalars()
                .all()
            )
            entries = [
                SessionEntry(
                    plan_id=row.plan_id,
                    week_id=row.week_id,
                    day_id=row.day_id,
                    updated_at=row.updated_at,
                    data=load_document(row.data),
                )
                for row in rows
            ]
        logger.debug(f"Loaded {len(entries)} sessions", user_id=user_id)
        return entries
