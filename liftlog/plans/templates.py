"""Template store: plain CRUD over reusable plan documents."""

from __future__ import annotations

from typing import Any

from loguru import logger
from sqlalchemy import delete, select

from liftlog.db import models
from liftlog.db.documents import dump_document
from liftlog.db.session import SessionScope, get_session
from liftlog.errors import NotFoundError
from liftlog.plans.types import DEFAULT_TEMPLATE_NAME, Template


class TemplateStore:
    def __init__(self, session_scope: SessionScope = get_session) -> None:
        self._session_scope = session_scope

    def list(self, user_id: str) -> list[Template]:
        with self._session_scope() as db:
            rows = (
                db.execute(
                    select(models.Template)
                    .where(models.Template.user_id == user_id)
                    .order_by(models.Template.id.desc())
                )
                .scalars()
                .all()
            )
            return [Template.from_model(row) for row in rows]

    def create(self, user_id: str, name: str | None = None, data: Any = None) -> Template:
        with self._session_scope() as db:
            row = models.Template(
                user_id=user_id,
                name=name or DEFAULT_TEMPLATE_NAME,
                data=dump_document(data if data is not None else {}),
            )
            db.add(row)
            db.flush()
            db.refresh(row)
            template = Template.from_model(row)
        logger.info("Template created", user_id=user_id, template_id=template.id)
        return template

    def update(self, template_id: int, user_id: str, name: str | None, data: Any) -> Template:
        """Replace a template's name and document.

        Raises:
            NotFoundError: If the template does not exist or belongs to another user
        """
        with self._session_scope() as db:
            row = db.execute(
                select(models.Template).where(
                    models.Template.id == template_id,
                    models.Template.user_id == user_id,
                )
            ).scalar_one_or_none()
            if row is None:
                raise NotFoundError("Template", template_id)
            row.name = name or DEFAULT_TEMPLATE_NAME
            row.data = dump_document(data if data is not None else {})
            db.flush()
            template = Template.from_model(row)
        logger.info("Template updated", user_id=user_id, template_id=template_id)
        return template

    def delete(self, template_id: int, user_id: str) -> None:
        with self._session_scope() as db:
            db.execute(
                delete(models.Template).where(
                    models.Template.id == template_id,
                    models.Template.user_id == user_id,
                )
            )
        logger.info("Template delete", user_id=user_id, template_id=template_id)
