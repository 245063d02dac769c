"""Database: engine ownership and transaction scoping for the SQL adapter."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine

from lifeplan.config.settings import LifeplanSettings
from lifeplan.infrastructure.database.engine import init_database
from lifeplan.infrastructure.database.storage import SqlStorage

logger = logging.getLogger(__name__)


class Database:
    """Opens transactions and hands out transaction-bound storage.

    Owns the engine it creates from ``settings.database_url``; an engine
    passed in explicitly stays owned by the caller and is not disposed.
    """

    def __init__(self, settings: LifeplanSettings, *, engine: Engine | None = None) -> None:
        self._settings = settings
        self._owns_engine = engine is None
        self._engine = engine if engine is not None else init_database(settings.database_url)

    @property
    def settings(self) -> LifeplanSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[SqlStorage]:
        """Run a block in one database transaction.

        Commits when the block completes; any exception (an
        ``InvariantError`` from a service, a constraint failure from the
        database) rolls back every write made in the block and propagates.

        Usage::

            with database.transaction() as storage:
                invariants = InvariantService(storage, database.settings)
                invariants.enforce_weekly_task_cap(user_id, week_start)
                storage.insert_entity(EntityKind.WEEKLY_TASK, user_id, values)
        """
        with self._engine.begin() as conn:
            yield SqlStorage(conn)

    def close(self) -> None:
        """Dispose the engine if this instance created it."""
        if self._owns_engine:
            self._engine.dispose()
            logger.debug("Disposed database engine")
