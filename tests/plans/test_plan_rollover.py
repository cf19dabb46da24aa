"""Tests for plan rollover and lineage.

Rollover must:
- Archive the source
- Create an active successor pointing at the source
- Copy the source document (independent of later edits)
- Bump the "(#N)" version in the name
"""

import pytest

from liftlog.db.models import Plan as PlanRow
from liftlog.errors import NotFoundError, StorageError, ValidationError
from liftlog.plans.store import PlanStore

PLAN_DATA = {
    "weeks": [
        {
            "id": "w1",
            "name": "Week 1",
            "days": [
                {"id": "d1", "name": "Push", "items": [{"id": "i1", "exerciseName": "Bench", "targetSets": 3}]},
            ],
        }
    ]
}


def test_rollover_archives_source_and_links_successor(plan_store: PlanStore, test_user_id: str) -> None:
    source = plan_store.create(test_user_id, "Push Day", PLAN_DATA)

    successor = plan_store.rollover(source.id, test_user_id)

    assert successor.id != source.id
    assert successor.name == "Push Day (#2)"
    assert successor.archived is False
    assert successor.predecessor_plan_id == source.id
    assert successor.data == PLAN_DATA
    assert plan_store.get(source.id, test_user_id).archived is True


def test_rollover_copies_document(plan_store: PlanStore, test_user_id: str) -> None:
    source = plan_store.create(test_user_id, "Push Day", PLAN_DATA)
    successor = plan_store.rollover(source.id, test_user_id)

    plan_store.update(successor.id, test_user_id, successor.name, {"weeks": []})

    assert plan_store.get(source.id, test_user_id).data == PLAN_DATA


def test_repeated_rollover_bumps_version(plan_store: PlanStore, test_user_id: str) -> None:
    plan = plan_store.create(test_user_id, "Push Day", PLAN_DATA)

    names = []
    for _ in range(3):
        plan = plan_store.rollover(plan.id, test_user_id)
        names.append(plan.name)

    assert names == ["Push Day (#2)", "Push Day (#3)", "Push Day (#4)"]
    assert [p.id for p in plan_store.list(test_user_id)] == [plan.id]


def test_rollover_missing_or_foreign_plan(plan_store: PlanStore, test_user_id: str, other_user_id: str) -> None:
    plan = plan_store.create(test_user_id, "Push Day", PLAN_DATA)

    with pytest.raises(NotFoundError):
        plan_store.rollover(9999, test_user_id)
    with pytest.raises(NotFoundError):
        plan_store.rollover(plan.id, other_user_id)

    assert plan_store.get(plan.id, test_user_id).archived is False
    assert len(plan_store.list(test_user_id)) == 1


def test_lineage_walks_predecessors_newest_first(plan_store: PlanStore, test_user_id: str) -> None:
    root = plan_store.create(test_user_id, "Block", PLAN_DATA)
    second = plan_store.rollover(root.id, test_user_id)
    third = plan_store.rollover(second.id, test_user_id)

    chain = plan_store.lineage(third.id, test_user_id)

    assert [p.id for p in chain] == [third.id, second.id, root.id]
    assert chain[-1].predecessor_plan_id is None


def test_lineage_stops_at_deleted_predecessor(plan_store: PlanStore, test_user_id: str) -> None:
    root = plan_store.create(test_user_id, "Block", PLAN_DATA)
    second = plan_store.rollover(root.id, test_user_id)

    plan_store.delete(root.id, test_user_id)

    assert plan_store.get(second.id, test_user_id).predecessor_plan_id is None
    assert [p.id for p in plan_store.lineage(second.id, test_user_id)] == [second.id]


def test_plan_rolls_over_only_once(plan_store: PlanStore, test_user_id: str) -> None:
    source = plan_store.create(test_user_id, "Push", PLAN_DATA)
    successor = plan_store.rollover(source.id, test_user_id)

    with pytest.raises(ValidationError, match="already been rolled over"):
        plan_store.rollover(source.id, test_user_id)

    active = plan_store.list(test_user_id)
    assert [p.id for p in active] == [successor.id]
    assert [p.predecessor_plan_id for p in active] == [source.id]


def test_rollover_allowed_again_after_successor_deleted(plan_store: PlanStore, test_user_id: str) -> None:
    source = plan_store.create(test_user_id, "Push", PLAN_DATA)
    first = plan_store.rollover(source.id, test_user_id)
    plan_store.delete(first.id, test_user_id)

    second = plan_store.rollover(source.id, test_user_id)

    assert second.predecessor_plan_id == source.id
    assert second.name == "Push (#2)"


def test_database_rejects_two_active_successors(plan_store: PlanStore, session_scope, test_user_id: str) -> None:
    source = plan_store.create(test_user_id, "Push", PLAN_DATA)
    plan_store.rollover(source.id, test_user_id)

    with pytest.raises(StorageError):
        with session_scope() as db:
            db.add(PlanRow(user_id=test_user_id, name="Push (#2)", data="{}", archived=False, predecessor_plan_id=source.id))

    with session_scope() as db:
        db.add(PlanRow(user_id=test_user_id, name="Push (#2)", data="{}", archived=True, predecessor_plan_id=source.id))
    assert len(plan_store.list(test_user_id, archived=True)) == 2
