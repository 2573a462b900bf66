"""
db.engine - Engine bootstrap and session factory.

Designed so the connection string can be swapped to Postgres
by changing config.DB_URL; no other code needs to change.

The Database handle is owned by whoever composes the application
(main.create_app, a test fixture, a script).  Nothing in the core
keeps a module-level engine.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

import config
from db.models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns one engine (and therefore one connection pool)."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def new_session(self) -> Session:
        """Return a new session.  Caller is responsible for .close()."""
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session scope that always hands the connection back to the pool."""
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool closed")


def init_db(db_url: str | None = None) -> Database:
    """Create the engine, apply SQLite pragmas, and emit CREATE TABLE."""
    db_url = db_url or config.DB_URL

    if db_url.startswith("sqlite"):
        engine = create_engine(
            db_url, echo=config.DB_ECHO, future=True,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL")
            cur.execute("PRAGMA foreign_keys=ON")
            cur.execute("PRAGMA synchronous=NORMAL")
            cur.close()
    else:
        engine = create_engine(
            db_url, echo=config.DB_ECHO, future=True,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
            pool_timeout=config.DB_POOL_TIMEOUT,
            pool_pre_ping=True,
        )

    Base.metadata.create_all(engine)
    logger.info("Database initialised (%s)", engine.url.render_as_string(hide_password=True))
    return Database(engine)
