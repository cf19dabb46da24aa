"""Plan store: CRUD, archive and versioned rollover.

Ownership is enforced by filtering on user_id. A plan owned by someone else is
indistinguishable from a missing one.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liftlog.db import models
from liftlog.db.documents import dump_document, load_document
from liftlog.db.session import SessionScope, get_session
from liftlog.errors import NotFoundError, ValidationError
from liftlog.plans.naming import next_version_name
from liftlog.plans.types import DEFAULT_PLAN_NAME, Plan


def _owned_plan(db: Session, plan_id: int, user_id: str | None, *, for_update: bool = False) -> models.Plan:
    query = select(models.Plan).where(models.Plan.id == plan_id)
    if user_id is not None:
        query = query.where(models.Plan.user_id == user_id)
    if for_update:
        query = query.with_for_update()
    row = db.execute(query).scalar_one_or_none()
    if row is None:
        raise NotFoundError("Plan", plan_id)
    return row


class PlanStore:
    def __init__(self, session_scope: SessionScope = get_session) -> None:
        self._session_scope = session_scope

    def list(self, user_id: str, *, archived: bool = False) -> list[Plan]:
        """List a user's plans that are exactly active or exactly archived, newest first."""
        with self._session_scope() as db:
            rows = (
                db.execute(
                    select(models.Plan)
                    .where(models.Plan.user_id == user_id, models.Plan.archived == archived)
                    .order_by(models.Plan.id.desc())
                )
                .scalars()
                .all()
            )
            plans = [Plan.from_model(row) for row in rows]
        logger.debug(f"Loaded {len(plans)} plans", user_id=user_id, archived=archived)
        return plans

    def get(self, plan_id: int, user_id: str) -> Plan:
        with self._session_scope() as db:
            return Plan.from_model(_owned_plan(db, plan_id, user_id))

    def create(self, user_id: str, name: str | None = None, data: Any = None) -> Plan:
        """Create an active root plan. Blank names become "Plan"."""
        with self._session_scope() as db:
            row = models.Plan(
                user_id=user_id,
                name=name or DEFAULT_PLAN_NAME,
                data=dump_document(data if data is not None else {}),
                archived=False,
                predecessor_plan_id=None,
            )
            db.add(row)
            db.flush()
            db.refresh(row)
            plan = Plan.from_model(row)
        logger.info("Plan created", user_id=user_id, plan_id=plan.id)
        return plan

    def update(self, plan_id: int, user_id: str, name: str | None, data: Any) -> Plan:
        """Replace a plan's name and document.

        Raises:
            NotFoundError: If the plan does not exist or belongs to another user
        """
        with self._session_scope() as db:
            row = _owned_plan(db, plan_id, user_id)
            row.name = name or DEFAULT_PLAN_NAME
            row.data = dump_document(data if data is not None else {})
            db.flush()
            plan = Plan.from_model(row)
        logger.info("Plan updated", user_id=user_id, plan_id=plan_id)
        return plan

    def archive(self, plan_id: int, user_id: str | None = None) -> Plan:
        """Archive a plan. Archiving an archived plan succeeds unchanged.

        Raises:
            NotFoundError: If no plan matched
        """
        return self._set_archived(plan_id, user_id, archived=True)

    def unarchive(self, plan_id: int, user_id: str | None = None) -> Plan:
        """Return an archived plan to the active list. Idempotent."""
        return self._set_archived(plan_id, user_id, archived=False)

    def _set_archived(self, plan_id: int, user_id: str | None, *, archived: bool) -> Plan:
        with self._session_scope() as db:
            row = _owned_plan(db, plan_id, user_id)
            changed = row.archived != archived
            row.archived = archived
            db.flush()
            plan = Plan.from_model(row)
        logger.info("Plan archive flag set", plan_id=plan_id, archived=archived, changed=changed)
        return plan

    def delete(self, plan_id: int, user_id: str) -> None:
        """Hard delete a plan. Deleting a missing or foreign plan is a no-op.

        Sessions and completions recorded against the plan are left in place.
        """
        with self._session_scope() as db:
            result = db.execute(
                delete(models.Plan).where(models.Plan.id == plan_id, models.Plan.user_id == user_id)
            )
        logger.info("Plan delete", user_id=user_id, plan_id=plan_id, deleted=result.rowcount)

    def rollover(self, plan_id: int, user_id: str) -> Plan:
        """Archive a plan and continue it as a new version.

        The successor gets the next "(#N)" name, a copy of the source document
        and a predecessor pointer to the source. Both writes commit together.
        A plan can be rolled over once; delete its successor to roll it over
        again.

        Raises:
            NotFoundError: If the plan does not exist or belongs to another user
            ValidationError: If the plan already has a successor
            CorruptDocumentError: If the source document cannot be decoded
        """
        with self._session_scope() as db:
            source = _owned_plan(db, plan_id, user_id, for_update=True)
            existing = db.execute(
                select(models.Plan.id).where(models.Plan.predecessor_plan_id == source.id).limit(1)
            ).scalar_one_or_none()
            if existing is not None:
                logger.warning("Rollover rejected, plan already has a successor", plan_id=plan_id, successor_id=existing)
                raise ValidationError("Plan has already been rolled over")

            document = load_document(source.data, default={})
            new_name = next_version_name(source.name)

            source.archived = True
            successor = models.Plan(
                user_id=user_id,
                name=new_name,
                data=dump_document(document),
                archived=False,
                predecessor_plan_id=source.id,
            )
            db.add(successor)
            try:
                db.flush()
            except IntegrityError as e:
                # Lost a race with a concurrent rollover of the same plan
                logger.warning("Rollover rejected by active predecessor index", plan_id=plan_id)
                raise ValidationError("Plan has already been rolled over") from e
            db.refresh(successor)
            plan = Plan.from_model(successor)

        logger.info(
            "Plan rolled over",
            user_id=user_id,
            plan_id=plan_id,
            successor_id=plan.id,
        )
        return plan

    def lineage(self, plan_id: int, user_id: str) -> list[Plan]:
        """Get a plan followed by its predecessors, newest first.

        The walk stops at a root, at a pointer to a plan that no longer exists
        or is not owned by the user, or at a plan already visited.

        Raises:
            NotFoundError: If the starting plan does not exist or belongs to another user
        """
        chain: list[Plan] = []
        seen: set[int] = set()
        with self._session_scope() as db:
            row: models.Plan | None = _owned_plan(db, plan_id, user_id)
            while row is not None and row.id not in seen:
                seen.add(row.id)
                chain.append(Plan.from_model(row))
                if row.predecessor_plan_id is None:
                    break
                row = db.execute(
                    select(models.Plan).where(
                        models.Plan.id == row.predecessor_plan_id,
                        models.Plan.user_id == user_id,
                    )
                ).scalar_one_or_none()
        return chain
