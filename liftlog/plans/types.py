"""Plan and template records returned by the stores.

Records are detached snapshots with their documents already decoded.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from liftlog.db import models
from liftlog.db.documents import load_document

DEFAULT_PLAN_NAME = "Plan"
DEFAULT_TEMPLATE_NAME = "Template"


@dataclass(frozen=True)
class Plan:
    id: int
    user_id: str
    name: str
    archived: bool
    predecessor_plan_id: int | None
    created_at: datetime
    data: Any = field(default_factory=dict)

    @classmethod
    def from_model(cls, row: models.Plan) -> "Plan":
        """Create a record from a Plan row.

        Raises:
            CorruptDocumentError: If the stored document cannot be decoded
        """
        return cls(
            id=row.id,
            user_id=row.user_id,
            name=row.name,
            archived=bool(row.archived),
            predecessor_plan_id=row.predecessor_plan_id,
            created_at=row.created_at,
            data=load_document(row.data, default={}),
        )


@dataclass(frozen=True)
class Template:
    id: int
    user_id: str
    name: str
    created_at: datetime
    data: Any = field(default_factory=dict)

    @classmethod
    def from_model(cls, row: models.Template) -> "Template":
        return cls(
            id=row.id,
            user_id=row.user_id,
            name=row.name,
            created_at=row.created_at,
            data=load_document(row.data, default={}),
        )
