"""StoragePort: the narrow persistence contract the services depend on.

An implementation is bound to one open transaction; every call it serves
runs inside that transaction. Rows come back as mappings keyed by
snake_case column names (``id``, ``user_id``, ``week_start``, ...), and
filter keywords use the same names. Instants are timezone-aware UTC.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeAlias

from lifeplan.domain.types import EntityKind

Row: TypeAlias = Mapping[str, Any]


class StoragePort(Protocol):
    # --- Reads ---

    def find_owned_entity(self, kind: EntityKind, entity_id: str, user_id: str) -> Row | None:
        """Row with *entity_id* if it belongs to *user_id*, else None."""
        ...

    def find_owned_ids(self, kind: EntityKind, ids: Sequence[str], user_id: str) -> set[str]:
        """Subset of *ids* that exist and belong to *user_id*."""
        ...

    def count_where(
        self,
        kind: EntityKind,
        user_id: str,
        *,
        excluding_id: str | None = None,
        **filters: Any,
    ) -> int:
        """Count the user's rows matching every ``column=value`` filter."""
        ...

    def find_by_normalized_unique_key(
        self,
        kind: EntityKind,
        user_id: str,
        normalized: str,
        *,
        excluding_id: str | None = None,
        **scope: Any,
    ) -> Row | None:
        """First user row whose normalized column equals *normalized*."""
        ...

    def list_ordered(self, kind: EntityKind, user_id: str) -> list[Row]:
        """The user's rows by ascending ``order``."""
        ...

    def max_order(self, kind: EntityKind, user_id: str) -> int:
        """Highest ``order`` among the user's rows, 0 when there are none."""
        ...

    # --- Writes ---

    def shift_orders(self, kind: EntityKind, user_id: str, from_order: int) -> None:
        """Increment ``order`` of every user row at or above *from_order*."""
        ...

    def set_order(self, kind: EntityKind, entity_id: str, order: int) -> None: ...

    def nullify_references(self, kind: EntityKind, column: str, value: str) -> int:
        """Set *column* to NULL on rows of *kind* where it equals *value*."""
        ...

    def delete_entity(self, kind: EntityKind, entity_id: str) -> None: ...

    def replace_links(self, theme_id: str, goal_ids: Sequence[str]) -> None:
        """Replace all goal links of a focus theme with *goal_ids*."""
        ...

