from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, false, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class Plan(Base):
    """Workout plan owned by a user.

    Schema:
    - id: Autoincrement primary key
    - user_id: Owner (verified upstream, opaque string)
    - name: Display name, versioned by rollover with a trailing "(#N)"
    - data: Plan document (weeks -> days -> items) serialized as JSON text
    - archived: Active/archived flag
    - predecessor_plan_id: Plan this one was rolled over from (NULL for roots)
    - created_at: Record creation timestamp

    Constraints:
    - predecessor_plan_id is written once at insert and never updated
    - Deleting a predecessor nulls the pointer on its successor
    - At most one active plan points at a given predecessor
    """

    __tablename__ = "plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    data: Mapped[str | None] = mapped_column(Text, nullable=True)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    predecessor_plan_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("plans.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_plans_user_archived", "user_id", "archived"),
    )


class Template(Base):
    """Reusable plan document that is never tracked against."""

    __tablename__ = "templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    data: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


class WorkoutSession(Base):
    """Saved workout session for one (user, plan, week, day) slot.

    Overwritten in place on every save; no history is kept.
    """

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    plan_id: Mapped[int] = mapped_column(Integer, nullable=False)
    week_id: Mapped[str] = mapped_column(String, nullable=False)
    day_id: Mapped[str] = mapped_column(String, nullable=False)
    data: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "plan_id", "week_id", "day_id", name="uq_sessions_slot"),
        Index("idx_sessions_user_updated_at", "user_id", "updated_at"),
    )


class Completion(Base):
    """Completion mark for a slot. Row present means completed."""

    __tablename__ = "completions"

    user_id: Mapped[str] = mapped_column(String, primary_key=True)
    plan_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    week_id: Mapped[str] = mapped_column(String, primary_key=True)
    day_id: Mapped[str] = mapped_column(String, primary_key=True)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_completions_plan_completed_at", "user_id", "plan_id", "completed_at"),
    )


class UserPrefs(Base):
    """Last viewed plan/week/day, one row per user."""

    __tablename__ = "user_prefs"

    user_id: Mapped[str] = mapped_column(String, primary_key=True)
    last_plan_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_week_id: Mapped[str | None] = mapped_column(String, nullable=True)
    last_day_id: Mapped[str | None] = mapped_column(String, nullable=True)


class Exercise(Base):
    """User exercise library entry. Names are unique per user, ignoring case."""

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)


Index("uq_exercises_user_lower_name", Exercise.user_id, func.lower(Exercise.name), unique=True)

# A plan rolls over into at most one active successor
Index(
    "uq_plans_active_predecessor",
    Plan.predecessor_plan_id,
    unique=True,
    sqlite_where=Plan.archived == false(),
    postgresql_where=Plan.archived == false(),
)
