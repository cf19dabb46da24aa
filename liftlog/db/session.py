from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import AbstractContextManager, contextmanager

from loguru import logger
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from liftlog.config.settings import settings
from liftlog.db.models import Base
from liftlog.errors import LiftLogError, StorageError

SessionScope = Callable[[], AbstractContextManager[Session]]


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """Enable foreign key constraints in SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine with connection args suited to the backend.

    In-memory SQLite gets a StaticPool so every session sees the same database.
    """
    url = database_url.lower()
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in {"sqlite://", "sqlite:///"}:
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        connect_args={"connect_timeout": 10, "application_name": "liftlog"},
        pool_pre_ping=True,
        pool_recycle=3600,
    )


# Lazy initialization so importing the package never opens a connection
_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def _get_engine() -> Engine:
    """Get or create the process-wide database engine."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")
        _engine = create_db_engine(settings.database_url, echo=settings.sql_echo)
        logger.info("Database engine initialized")
    return _engine


def get_engine() -> Engine:
    """Get or create the database engine (public API)."""
    return _get_engine()


def _get_session_local() -> sessionmaker:
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


@contextmanager
def _transaction(factory: sessionmaker) -> Generator[Session, None, None]:
    """Run one unit of work: commit on success, roll back on any error.

    LiftLog errors are business outcomes and pass through untouched. Engine
    errors are logged in full and re-raised as a generic StorageError.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except LiftLogError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        logger.exception(f"Database error, rolling back: {type(e).__name__}")
        session.rollback()
        raise StorageError() from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get a transactional session on the process-wide engine."""
    with _transaction(_get_session_local()) as session:
        yield session


def make_session_scope(engine: Engine) -> SessionScope:
    """Build a session scope bound to a specific engine.

    Stores take a scope at construction; tests and tools use this to point
    them at an engine other than the process default.
    """
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @contextmanager
    def scope() -> Generator[Session, None, None]:
        with _transaction(factory) as session:
            yield session

    return scope


def init_db(engine: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    target = engine or _get_engine()
    Base.metadata.create_all(bind=target)
    logger.info("Database tables verified")


def check_connection(engine: Engine | None = None) -> None:
    """Test database connection on startup."""
    target = engine or _get_engine()
    try:
        with target.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection test successful")
    except SQLAlchemyError as e:
        logger.error(f"Database connection test failed: {e}")
        raise StorageError("Database is unreachable") from e
