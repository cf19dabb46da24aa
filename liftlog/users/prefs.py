"""Preference store: where the user left off (plan, week, day)."""

from dataclasses import dataclass

from loguru import logger
from sqlalchemy import select

from liftlog.db.models import UserPrefs as UserPrefsRow
from liftlog.db.session import SessionScope, get_session
from liftlog.db.upsert import upsert


@dataclass(frozen=True)
class UserPrefs:
    user_id: str
    last_plan_id: int | None
    last_week_id: str | None
    last_day_id: str | None


class PreferenceStore:
    def __init__(self, session_scope: SessionScope = get_session) -> None:
        self._session_scope = session_scope

    def set(self, user_id: str, last_plan_id: int | None, last_week_id: str | None, last_day_id: str | None) -> None:
        """Replace all three last-viewed fields for a user at once."""
        with self._session_scope() as db:
            upsert(
                db,
                UserPrefsRow,
                {
                    "user_id": user_id,
                    "last_plan_id": last_plan_id,
                    "last_week_id": last_week_id,
                    "last_day_id": last_day_id,
                },
                key=["user_id"],
                update=["last_plan_id", "last_week_id", "last_day_id"],
            )
        logger.info("Preferences saved", user_id=user_id, last_plan_id=last_plan_id)

    def get(self, user_id: str) -> UserPrefs | None:
        with self._session_scope() as db:
            row = db.execute(select(UserPrefsRow).where(UserPrefsRow.user_id == user_id)).scalar_one_or_none()
            if row is None:
                return None
            return UserPrefs(
                user_id=row.user_id,
                last_plan_id=row.last_plan_id,
                last_week_id=row.last_week_id,
                last_day_id=row.last_day_id,
            )
