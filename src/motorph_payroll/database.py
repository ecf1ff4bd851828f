"""Database connection and session management for the persistence layer.

The calculation engine never imports this module; callers load records here,
validate them into ``motorph_payroll.schemas`` records and hand those over.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from motorph_payroll.config import get_settings
from motorph_payroll.models import Base

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def get_engine(url: str | None = None) -> Engine:
    """Create database engine."""
    settings = get_settings()
    return create_engine(
        url or settings.database_url,
        echo=settings.sql_echo,
        pool_pre_ping=True,
    )


# Global engine and session factory
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def init_db(engine: Engine | None = None) -> tuple[Engine, sessionmaker[Session]]:
    """Initialize database engine and session factory.

    Passing an engine replaces the global one (used by tests).
    """
    global _engine, _session_factory
    if engine is not None or _engine is None:
        _engine = engine or get_engine()
        _session_factory = sessionmaker(
            _engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,
        )
    return _engine, _session_factory


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get a database session."""
    _, factory = init_db()
    with factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def create_schema(engine: Engine | None = None) -> None:
    """Create the employees, credentials, attendance and leave_request tables."""
    target, _ = init_db(engine)
    Base.metadata.create_all(target)
