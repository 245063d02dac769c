"""Dense 1..N ordering of a user's life areas.

Inserts clamp the requested position into ``[1, N + 1]`` and shift the
rows at or after it. Moves and deletions rewrite only the rows whose
position changed, so the orders stay contiguous. Every step writes
through the caller's transaction; a failure leaves no half-shifted
sequence behind.
"""

from __future__ import annotations

import logging

from lifeplan.config.logging import short_id
from lifeplan.domain.types import EntityKind
from lifeplan.services.base import BaseService
from lifeplan.services.invariants import InvariantService
from lifeplan.services.ports import Row

logger = logging.getLogger(__name__)


class OrderingService(BaseService):
    """Insert, move, delete and resequence ordered life areas."""

    kind = EntityKind.LIFE_AREA

    def insert_at_order(self, user_id: str, desired: int | None = None) -> int:
        """Make room for a new row and return the order it should take.

        No *desired* order (or 0) appends at ``N + 1``.
        """
        current_max = self._storage.max_order(self.kind, user_id)
        if not desired:
            return current_max + 1

        target = max(1, min(desired, current_max + 1))
        if target <= current_max:
            self._storage.shift_orders(self.kind, user_id, target)
        return target

    def resequence(self, user_id: str) -> None:
        """Reassign orders 1..N keeping the current relative order."""
        self._write_positions(self._storage.list_ordered(self.kind, user_id))

    def move_to_order(self, user_id: str, entity_id: str, desired: int) -> int:
        """Move an existing row to *desired* and return its final order.

        *desired* is clamped to ``[1, N]``. The other rows keep their
        relative order around the moved one.
        """
        InvariantService(self._storage, self._settings).ensure_ownership(
            user_id, entity_id, self.kind
        )
        rows = list(self._storage.list_ordered(self.kind, user_id))
        index = next(i for i, row in enumerate(rows) if row["id"] == entity_id)
        moved = rows.pop(index)

        target = max(1, min(desired, len(rows) + 1))
        rows.insert(target - 1, moved)
        self._write_positions(rows)
        return target

    def _write_positions(self, rows: list[Row]) -> None:
        for position, row in enumerate(rows, start=1):
            if row["order"] != position:
                self._storage.set_order(self.kind, row["id"], position)

    def delete_and_resequence(self, user_id: str, entity_id: str) -> None:
        """Delete a life area, keeping its goals (unlinked) and compacting the rest."""
        InvariantService(self._storage, self._settings).ensure_ownership(
            user_id, entity_id, self.kind
        )
        unlinked = self._storage.nullify_references(EntityKind.GOAL, "life_area_id", entity_id)
        self._storage.delete_entity(self.kind, entity_id)
        self.resequence(user_id)
        logger.debug("Deleted life area %s; unlinked %d goals", short_id(entity_id), unlinked)
