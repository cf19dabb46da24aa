"""Dialect-aware INSERT ... ON CONFLICT statements.

Slot writes must be a single statement so concurrent first writes to the
same key converge on one row instead of racing a check-then-insert.
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def dialect_insert(session: Session, model):
    """Return an insert construct that supports on_conflict_* for the bound engine.

    Raises:
        NotImplementedError: If the engine has no ON CONFLICT support
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upsert is not supported on dialect '{dialect}'")


def upsert(session: Session, model, values: dict, *, key: list[str], update: list[str]) -> None:
    """Insert a row, or update the given columns when the key already exists."""
    stmt = dialect_insert(session, model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=key,
        set_={column: stmt.excluded[column] for column in update},
    )
    session.execute(stmt)
