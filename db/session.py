"""
db/session.py

Lazily created SQLAlchemy engine and session factory.

Nothing touches the database at import time; the engine is built from
DatabaseSettings on first use so tests and the CLI can swap in their own
session factories.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import DatabaseSettings, load_database_settings

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def create_db_engine(settings: DatabaseSettings | None = None) -> Engine:
    """
    Create the PostgreSQL engine described by ``settings`` (env-driven by default).
    """

    settings = settings or load_database_settings()
    if not settings.is_postgres:
        raise RuntimeError("Only PostgreSQL URLs are supported.")

    return create_engine(
        settings.url,
        echo=settings.echo,
        pool_pre_ping=True,
        pool_recycle=settings.pool_recycle,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    # Loaded rows stay readable after the per-row commits of an import run.
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_engine() -> Engine:
    """Return the shared engine, creating it on first call."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def SessionLocal() -> Session:
    """Open a new session bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding a session that is always closed afterwards.
    """

    with SessionLocal() as db:
        yield db
