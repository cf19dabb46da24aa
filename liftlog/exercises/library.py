"""Exercise library: a user's exercise names, unique ignoring case."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from liftlog.db import models
from liftlog.db.session import SessionScope, get_session
from liftlog.db.upsert import dialect_insert


@dataclass(frozen=True)
class Exercise:
    id: int
    user_id: str
    name: str
    created_at: datetime

    @classmethod
    def from_model(cls, row: models.Exercise) -> Exercise:
        return cls(id=row.id, user_id=row.user_id, name=row.name, created_at=row.created_at)


def _find(db: Session, user_id: str, name: str) -> models.Exercise | None:
    return db.execute(
        select(models.Exercise).where(
            models.Exercise.user_id == user_id,
            func.lower(models.Exercise.name) == func.lower(name),
        )
    ).scalar_one_or_none()


class ExerciseLibrary:
    def __init__(self, session_scope: SessionScope = get_session) -> None:
        self._session_scope = session_scope

    def list(self, user_id: str) -> list[Exercise]:
        with self._session_scope() as db:
            rows = (
                db.execute(
                    select(models.Exercise)
                    .where(models.Exercise.user_id == user_id)
                    .order_by(func.lower(models.Exercise.name).asc())
                )
                .scalars()
                .all()
            )
            return [Exercise.from_model(row) for row in rows]

    def find_by_name(self, user_id: str, name: str | None) -> Exercise | None:
        """Find an exercise by trimmed, case-insensitive name."""
        clean = (name or "").strip()
        if not clean:
            return None
        with self._session_scope() as db:
            row = _find(db, user_id, clean)
            return Exercise.from_model(row) if row is not None else None

    def find_or_create(self, user_id: str, name: str | None) -> Exercise | None:
        """Return the existing exercise with this name, creating it if needed.

        Concurrent callers with the same name (in any case) end up with the
        same row: the insert is skipped on conflict and the winner is re-read.
        """
        clean = (name or "").strip()
        if not clean:
            return None
        with self._session_scope() as db:
            stmt = (
                dialect_insert(db, models.Exercise)
                .values(user_id=user_id, name=clean, created_at=datetime.now(timezone.utc))
                .on_conflict_do_nothing()
            )
            inserted = db.execute(stmt).rowcount
            row = _find(db, user_id, clean)
            exercise = Exercise.from_model(row)
        if inserted:
            logger.info("Exercise created", user_id=user_id, exercise_id=exercise.id)
        return exercise

    def delete(self, exercise_id: int, user_id: str) -> None:
        with self._session_scope() as db:
            db.execute(
                delete(models.Exercise).where(
                    models.Exercise.id == exercise_id,
                    models.Exercise.user_id == user_id,
                )
            )
        logger.info("Exercise delete", user_id=user_id, exercise_id=exercise_id)
