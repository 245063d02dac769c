"""Shared pytest fixtures and test helpers for lifeplan tests."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, TypeAlias

import pytest
from sqlalchemy.engine import Engine

from lifeplan.config.settings import LifeplanSettings
from lifeplan.domain.ids import generate_id, normalize_key
from lifeplan.domain.types import EntityKind, GoalStatus, Horizon, SignalType, WEEKDAYS
from lifeplan.infrastructure.database.engine import init_database
from lifeplan.infrastructure.database.storage import SqlStorage
from lifeplan.infrastructure.store import Database

USER_ID = "user-0001-aaaa"
OTHER_USER_ID = "user-0002-bbbb"


# ---------------------------------------------------------------------------
# In-memory storage port
# ---------------------------------------------------------------------------


_DISPLAY_COLUMN = {EntityKind.LIFE_AREA: "name", EntityKind.WEEKLY_TASK: "title"}


class FakeStorage:
    """Dictionary-backed StoragePort for service tests without a database."""

    def __init__(self) -> None:
        self.rows: dict[EntityKind, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.links: dict[str, list[str]] = {}

    def insert_entity(self, kind: EntityKind, user_id: str, values: dict[str, Any]) -> str:
        entity_id = generate_id()
        self.rows[kind][entity_id] = {"id": entity_id, "user_id": user_id, **values}
        return entity_id

    def _matching(
        self, kind: EntityKind, user_id: str, excluding_id: str | None, filters: dict[str, Any]
    ) -> list[dict[str, Any]]:
        return [
            row
            for row in self.rows[kind].values()
            if row["user_id"] == user_id
            and row["id"] != excluding_id
            and all(row.get(name) == value for name, value in filters.items())
        ]

    # --- StoragePort ---

    def find_owned_entity(
        self, kind: EntityKind, entity_id: str, user_id: str
    ) -> dict[str, Any] | None:
        row = self.rows[kind].get(entity_id)
        if row is None or row["user_id"] != user_id:
            return None
        return dict(row)

    def find_owned_ids(self, kind: EntityKind, ids: Sequence[str], user_id: str) -> set[str]:
        return {i for i in ids if self.find_owned_entity(kind, i, user_id) is not None}

    def count_where(
        self, kind: EntityKind, user_id: str, *, excluding_id: str | None = None, **filters: Any
    ) -> int:
        return len(self._matching(kind, user_id, excluding_id, filters))

    def find_by_normalized_unique_key(
        self,
        kind: EntityKind,
        user_id: str,
        normalized: str,
        *,
        excluding_id: str | None = None,
        **scope: Any,
    ) -> dict[str, Any] | None:
        column = _DISPLAY_COLUMN[kind]
        for row in self._matching(kind, user_id, excluding_id, scope):
            if normalize_key(row[column]) == normalized:
                return dict(row)
        return None

    def list_ordered(self, kind: EntityKind, user_id: str) -> list[dict[str, Any]]:
        rows = self._matching(kind, user_id, None, {})
        return [dict(row) for row in sorted(rows, key=lambda r: (r["order"], r["id"]))]

    def max_order(self, kind: EntityKind, user_id: str) -> int:
        return max((row["order"] for row in self._matching(kind, user_id, None, {})), default=0)

    def shift_orders(self, kind: EntityKind, user_id: str, from_order: int) -> None:
        for row in self._matching(kind, user_id, None, {}):
            if row["order"] >= from_order:
                row["order"] += 1

    def set_order(self, kind: EntityKind, entity_id: str, order: int) -> None:
        self.rows[kind][entity_id]["order"] = order

    def nullify_references(self, kind: EntityKind, column: str, value: str) -> int:
        count = 0
        for row in self.rows[kind].values():
            if row.get(column) == value:
                row[column] = None
                count += 1
        return count

    def delete_entity(self, kind: EntityKind, entity_id: str) -> None:
        self.rows[kind].pop(entity_id, None)

    def replace_links(self, theme_id: str, goal_ids: Sequence[str]) -> None:
        self.links[theme_id] = list(goal_ids)

    # --- Inspection ---

    def orders(self, user_id: str = USER_ID) -> dict[str, int]:
        """Map life area name to order."""
        return {
            row["name"]: row["order"]
            for row in self.list_ordered(EntityKind.LIFE_AREA, user_id)
        }


StorageWithInserts: TypeAlias = SqlStorage | FakeStorage


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


# ---------------------------------------------------------------------------
# SQL fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "lifeplan.db"


@pytest.fixture
def db_engine(db_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(db_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(tmp_path: Path, db_path: Path, monkeypatch: pytest.MonkeyPatch) -> LifeplanSettings:
    """Default settings isolated from the developer's environment."""
    monkeypatch.delenv("LIFEPLAN_CONFIG", raising=False)
    monkeypatch.delenv("LIFEPLAN_CALENDAR__TIMEZONE", raising=False)
    return LifeplanSettings.load(root=tmp_path, database_url=f"sqlite:///{db_path}")


@pytest.fixture
def database(settings: LifeplanSettings, db_engine: Engine) -> Iterator[Database]:
    db = Database(settings, engine=db_engine)
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage(database: Database) -> Iterator[SqlStorage]:
    """SqlStorage inside an open transaction, committed after the test."""
    with database.transaction() as txn:
        yield txn


# ---------------------------------------------------------------------------
# Shared test helpers (used across service and storage test modules)
# ---------------------------------------------------------------------------


def create_life_area(
    storage: StorageWithInserts, name: str, order: int, *, user_id: str = USER_ID
) -> str:
    return storage.insert_entity(EntityKind.LIFE_AREA, user_id, {"name": name, "order": order})


def create_goal(
    storage: StorageWithInserts,
    title: str = "Goal",
    *,
    user_id: str = USER_ID,
    horizon: Horizon = Horizon.WEEK,
    status: GoalStatus = GoalStatus.ACTIVE,
    target_date: datetime | None = None,
    life_area_id: str | None = None,
) -> str:
    values = {
        "title": title,
        "horizon": horizon,
        "status": status,
        "target_date": target_date,
        "life_area_id": life_area_id,
    }
    return storage.insert_entity(EntityKind.GOAL, user_id, values)


def create_weekly_task(
    storage: StorageWithInserts,
    title: str,
    week_start: datetime,
    *,
    user_id: str = USER_ID,
    goal_id: str | None = None,
) -> str:
    values: dict[str, Any] = {"title": title, "week_start": week_start, "goal_id": goal_id}
    values.update(dict.fromkeys(WEEKDAYS, False))
    return storage.insert_entity(EntityKind.WEEKLY_TASK, user_id, values)


def create_focus_theme(
    storage: StorageWithInserts,
    title: str,
    week_start: datetime,
    *,
    user_id: str = USER_ID,
) -> str:
    values = {"title": title, "week_start": week_start, "note": None}
    return storage.insert_entity(EntityKind.FOCUS_THEME, user_id, values)


def create_signal(
    storage: SqlStorage,
    signal_type: SignalType,
    date: datetime,
    value: float,
    *,
    user_id: str = USER_ID,
) -> str:
    return storage.insert_entity(
        EntityKind.SIGNAL, user_id, {"type": signal_type, "date": date, "value": value}
    )
