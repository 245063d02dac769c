"""SqlStorage: the StoragePort over one SQLAlchemy Core connection.

The connection is the caller's: it comes from ``engine.begin()`` and the
surrounding block owns commit and rollback. Nothing here commits.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Table, delete, func, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.sql.schema import Column

from lifeplan.domain.ids import generate_id
from lifeplan.domain.types import EntityKind
from lifeplan.infrastructure.database.schema import (
    goals,
    life_areas,
    signals,
    weekly_focus_theme_goals,
    weekly_focus_themes,
    weekly_tasks,
)

TABLES: dict[EntityKind, Table] = {
    EntityKind.LIFE_AREA: life_areas,
    EntityKind.GOAL: goals,
    EntityKind.WEEKLY_TASK: weekly_tasks,
    EntityKind.FOCUS_THEME: weekly_focus_themes,
    EntityKind.SIGNAL: signals,
}

NORMALIZED_COLUMNS: dict[EntityKind, str] = {
    EntityKind.LIFE_AREA: "name_norm",
    EntityKind.WEEKLY_TASK: "title_norm",
}


def _column(table: Table, name: str) -> Column[Any]:
    try:
        return table.c[name]
    except KeyError:
        msg = f"Unknown column {name!r} on {table.name}"
        raise ValueError(msg) from None


class SqlStorage:
    """Transaction-bound storage adapter used by the service layer."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    @property
    def conn(self) -> Connection:
        return self._conn

    def _scoped(
        self,
        table: Table,
        user_id: str,
        excluding_id: str | None,
        filters: Mapping[str, Any],
    ) -> list[ColumnElement[bool]]:
        clauses = [table.c.user_id == user_id]
        if excluding_id is not None:
            clauses.append(table.c.id != excluding_id)
        clauses.extend(_column(table, name) == value for name, value in filters.items())
        return clauses

    # --- Reads ---

    def find_owned_entity(
        self, kind: EntityKind, entity_id: str, user_id: str
    ) -> dict[str, Any] | None:
        table = TABLES[kind]
        row = self._conn.execute(
            select(table).where(table.c.id == entity_id, table.c.user_id == user_id)
        ).first()
        return dict(row._mapping) if row is not None else None

    def find_owned_ids(self, kind: EntityKind, ids: Sequence[str], user_id: str) -> set[str]:
        if not ids:
            return set()
        table = TABLES[kind]
        rows = self._conn.execute(
            select(table.c.id).where(table.c.id.in_(list(ids)), table.c.user_id == user_id)
        )
        return {row.id for row in rows}

    def count_where(
        self,
        kind: EntityKind,
        user_id: str,
        *,
        excluding_id: str | None = None,
        **filters: Any,
    ) -> int:
        table = TABLES[kind]
        stmt = (
            select(func.count())
            .select_from(table)
            .where(*self._scoped(table, user_id, excluding_id, filters))
        )
        return int(self._conn.execute(stmt).scalar_one())

    def find_by_normalized_unique_key(
        self,
        kind: EntityKind,
        user_id: str,
        normalized: str,
        *,
        excluding_id: str | None = None,
        **scope: Any,
    ) -> dict[str, Any] | None:
        table = TABLES[kind]
        norm = _column(table, NORMALIZED_COLUMNS[kind])
        stmt = (
            select(table)
            .where(norm == normalized, *self._scoped(table, user_id, excluding_id, scope))
            .limit(1)
        )
        row = self._conn.execute(stmt).first()
        return dict(row._mapping) if row is not None else None

    def list_ordered(self, kind: EntityKind, user_id: str) -> list[dict[str, Any]]:
        table = TABLES[kind]
        order = _column(table, "order")
        rows = self._conn.execute(
            select(table).where(table.c.user_id == user_id).order_by(order, table.c.id)
        )
        return [dict(row._mapping) for row in rows]

    def max_order(self, kind: EntityKind, user_id: str) -> int:
        table = TABLES[kind]
        order = _column(table, "order")
        stmt = select(func.coalesce(func.max(order), 0)).where(table.c.user_id == user_id)
        return int(self._conn.execute(stmt).scalar_one())

    # --- Writes ---

    def insert_entity(self, kind: EntityKind, user_id: str, values: Mapping[str, Any]) -> str:
        """Insert a row for *user_id* and return its new ID."""
        entity_id = generate_id()
        self._conn.execute(
            insert(TABLES[kind]).values(id=entity_id, user_id=user_id, **values)
        )
        return entity_id

    def shift_orders(self, kind: EntityKind, user_id: str, from_order: int) -> None:
        table = TABLES[kind]
        order = _column(table, "order")
        self._conn.execute(
            update(table)
            .where(table.c.user_id == user_id, order >= from_order)
            .values({order: order + 1})
        )

    def set_order(self, kind: EntityKind, entity_id: str, order: int) -> None:
        table = TABLES[kind]
        self._conn.execute(
            update(table).where(table.c.id == entity_id).values({_column(table, "order"): order})
        )

    def nullify_references(self, kind: EntityKind, column: str, value: str) -> int:
        table = TABLES[kind]
        ref = _column(table, column)
        result = self._conn.execute(update(table).where(ref == value).values({ref: None}))
        return result.rowcount

    def delete_entity(self, kind: EntityKind, entity_id: str) -> None:
        table = TABLES[kind]
        self._conn.execute(delete(table).where(table.c.id == entity_id))

    def replace_links(self, theme_id: str, goal_ids: Sequence[str]) -> None:
        links = weekly_focus_theme_goals
        self._conn.execute(delete(links).where(links.c.weekly_focus_theme_id == theme_id))
        if goal_ids:
            self._conn.execute(
                insert(links),
                [{"weekly_focus_theme_id": theme_id, "goal_id": goal_id} for goal_id in goal_ids],
            )

    def linked_goal_ids(self, theme_id: str) -> list[str]:
        links = weekly_focus_theme_goals
        rows = self._conn.execute(
            select(links.c.goal_id).where(links.c.weekly_focus_theme_id == theme_id)
        )
        return [row.goal_id for row in rows]
