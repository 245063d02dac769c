"""Delete flows that unlink dependents, and focus-theme goal links.

Parents are deleted without cascading to the rows that reference them:
the references are set to NULL first, inside the same transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lifeplan.config.logging import short_id, user_context
from lifeplan.domain.types import EntityKind
from lifeplan.services.base import BaseService
from lifeplan.services.invariants import InvariantService

logger = logging.getLogger(__name__)


class LifecycleService(BaseService):
    """Deletes and link replacement that keep references consistent."""

    @property
    def _invariants(self) -> InvariantService:
        return InvariantService(self._storage, self._settings)

    def delete_goal(self, user_id: str, goal_id: str) -> int:
        """Delete a goal after unlinking its weekly tasks; return how many were unlinked."""
        with user_context(user_id):
            self._invariants.ensure_ownership(user_id, goal_id, EntityKind.GOAL)
            unlinked = self._storage.nullify_references(
                EntityKind.WEEKLY_TASK, "goal_id", goal_id
            )
            self._storage.delete_entity(EntityKind.GOAL, goal_id)
            logger.debug("Deleted goal %s; unlinked %d weekly tasks", short_id(goal_id), unlinked)
            return unlinked

    def delete_weekly_task(self, user_id: str, task_id: str) -> str | None:
        """Delete a weekly task, then run the advisory weekly minimum.

        Returns the advisory copy when the week is now below the minimum.
        The deletion stands either way.
        """
        with user_context(user_id):
            invariants = self._invariants
            task = invariants.ensure_ownership(user_id, task_id, EntityKind.WEEKLY_TASK)
            self._storage.delete_entity(EntityKind.WEEKLY_TASK, task_id)
            return invariants.check_minimum_tasks(user_id, task["week_start"])

    def replace_linked_goals(self, user_id: str, theme_id: str, goal_ids: Sequence[str]) -> None:
        """Swap a focus theme's goal links for *goal_ids* (already validated)."""
        with user_context(user_id):
            invariants = self._invariants
            invariants.ensure_ownership(user_id, theme_id, EntityKind.FOCUS_THEME)
            invariants.ensure_goals_owned(user_id, goal_ids)
            self._storage.replace_links(theme_id, goal_ids)
