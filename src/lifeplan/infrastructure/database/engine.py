"""Database engine setup.

SQLAlchemy Core (not ORM): the engine only serves short, explicit
transactions opened by :class:`lifeplan.infrastructure.store.Database`.
SQLite connections get WAL mode and enforced foreign keys; other
backends are used as configured.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from lifeplan.infrastructure.database.schema import metadata


def create_db_engine(url: str | Path) -> Engine:
    """Create an engine for *url*; a filesystem path means a SQLite file."""
    if isinstance(url, Path):
        url = f"sqlite:///{url}"
    engine = create_engine(url, echo=False)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(url: str | Path) -> Engine:
    """Create the engine and every table in :data:`schema.metadata`.

    For SQLite files the parent directory is created first. Idempotent:
    safe to call on an existing database.

    Returns the engine ready for use.
    """
    if isinstance(url, Path):
        url.parent.mkdir(parents=True, exist_ok=True)
    else:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(url)
    metadata.create_all(engine)
    return engine
