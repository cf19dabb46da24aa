"""Tests for transactional session scopes."""

import pytest
from sqlalchemy import func, select, text

from liftlog.db.models import Plan
from liftlog.errors import NotFoundError, StorageError


def _plan_count(session_scope) -> int:
    with session_scope() as db:
        return db.execute(select(func.count()).select_from(Plan)).scalar_one()


def test_scope_commits_on_success(session_scope) -> None:
    with session_scope() as db:
        db.add(Plan(user_id="user-1", name="Push", data="{}", archived=False))

    assert _plan_count(session_scope) == 1


def test_scope_rolls_back_business_errors_unchanged(session_scope) -> None:
    with pytest.raises(NotFoundError):
        with session_scope() as db:
            db.add(Plan(user_id="user-1", name="Push", data="{}", archived=False))
            db.flush()
            raise NotFoundError("Plan", 1)

    assert _plan_count(session_scope) == 0


def test_scope_wraps_engine_errors(session_scope) -> None:
    with pytest.raises(StorageError) as exc_info:
        with session_scope() as db:
            db.execute(text("SELECT * FROM no_such_table"))

    assert str(exc_info.value) == "Storage operation failed"
    assert "no_such_table" not in str(exc_info.value)


def test_foreign_keys_enforced_on_sqlite(session_scope) -> None:
    with pytest.raises(StorageError):
        with session_scope() as db:
            db.add(Plan(user_id="user-1", name="Orphan", data="{}", archived=False, predecessor_plan_id=999))
