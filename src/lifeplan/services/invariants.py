"""Cross-entity invariant checks.

Ownership, soft caps, case-insensitive uniqueness and goal linkage all
need a storage read, so they run through the transaction-bound
:class:`StoragePort`. Count-then-insert races are closed by running the
check and the write in the same transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from lifeplan.config.logging import short_id
from lifeplan.domain import messages
from lifeplan.domain.calendar import format_calendar_date, local_date, week_start_for
from lifeplan.domain.ids import normalize_key
from lifeplan.domain.types import EntityKind, GoalStatus, Horizon
from lifeplan.services.base import BaseService
from lifeplan.services.errors import (
    CapExceededError,
    DuplicateError,
    LinkageError,
    NotFoundError,
)
from lifeplan.services.ports import Row

logger = logging.getLogger(__name__)

# Display column whose lower(trim()) form is stored for uniqueness lookups.
_DISPLAY_COLUMN: dict[EntityKind, str] = {
    EntityKind.LIFE_AREA: "name",
    EntityKind.WEEKLY_TASK: "title",
}


@dataclass(frozen=True)
class DuplicateCheck:
    """Outcome of a case-insensitive uniqueness lookup."""

    exists: bool
    existing_value: str | None = None


class InvariantService(BaseService):
    """Rules spanning more than one row, checked inside the caller's transaction."""

    # --- Ownership ---

    def ensure_ownership(self, user_id: str, entity_id: str, kind: EntityKind) -> Row:
        """Return the entity row, or raise NotFoundError if absent or foreign."""
        row = self._storage.find_owned_entity(kind, entity_id, user_id)
        if row is None:
            raise NotFoundError(messages.not_found(kind))
        return row

    def ensure_goals_owned(self, user_id: str, goal_ids: Sequence[str]) -> None:
        """Every linked goal must exist and belong to *user_id*."""
        if not goal_ids:
            return
        wanted = set(goal_ids)
        owned = self._storage.find_owned_ids(EntityKind.GOAL, list(wanted), user_id)
        if owned != wanted:
            raise NotFoundError(messages.not_found(EntityKind.GOAL))

    # --- Soft caps ---

    def enforce_soft_cap(
        self,
        user_id: str,
        kind: EntityKind,
        *,
        cap: int,
        message: str,
        excluding_id: str | None = None,
        **filters: Any,
    ) -> int:
        """Raise CapExceededError when the matching count is already at *cap*.

        *excluding_id* leaves one row out of the count, for updates that
        move a row into the capped set. Returns the count otherwise.
        """
        count = self._storage.count_where(kind, user_id, excluding_id=excluding_id, **filters)
        if count >= cap:
            raise CapExceededError(message)
        return count

    def enforce_active_goal_cap(self, user_id: str, *, excluding_id: str | None = None) -> int:
        cap = self._limits.active_goals
        return self.enforce_soft_cap(
            user_id,
            EntityKind.GOAL,
            cap=cap,
            message=messages.active_goal_cap(cap),
            excluding_id=excluding_id,
            status=GoalStatus.ACTIVE,
        )

    def enforce_weekly_task_cap(
        self, user_id: str, week_start: datetime, *, excluding_id: str | None = None
    ) -> int:
        cap = self._limits.tasks_per_week
        return self.enforce_soft_cap(
            user_id,
            EntityKind.WEEKLY_TASK,
            cap=cap,
            message=messages.weekly_task_cap(cap),
            excluding_id=excluding_id,
            week_start=week_start,
        )

    def enforce_life_area_cap(self, user_id: str) -> int:
        cap = self._limits.life_areas
        return self.enforce_soft_cap(
            user_id, EntityKind.LIFE_AREA, cap=cap, message=messages.life_area_cap(cap)
        )

    def count_weekly_tasks(self, user_id: str, week_start: datetime) -> int:
        return self._storage.count_where(EntityKind.WEEKLY_TASK, user_id, week_start=week_start)

    def check_minimum_tasks(self, user_id: str, week_start: datetime) -> str | None:
        """Advisory minimum: log and return the copy when a week falls short.

        Never raises, so it cannot block the write that triggered it.
        """
        minimum = self._limits.min_tasks_per_week
        count = self.count_weekly_tasks(user_id, week_start)
        if count >= minimum:
            return None
        logger.warning(
            "Week of %s for user %s has %d weekly tasks (minimum %d)",
            format_calendar_date(week_start),
            short_id(user_id),
            count,
            minimum,
        )
        return messages.weekly_task_minimum(minimum)

    # --- Case-insensitive uniqueness ---

    def check_case_insensitive_duplicate(
        self,
        user_id: str,
        kind: EntityKind,
        value: str,
        *,
        excluding_id: str | None = None,
        **scope: Any,
    ) -> DuplicateCheck:
        """Look *value* up by its normalized form; report the stored spelling."""
        row = self._storage.find_by_normalized_unique_key(
            kind, user_id, normalize_key(value), excluding_id=excluding_id, **scope
        )
        if row is None:
            return DuplicateCheck(exists=False)
        return DuplicateCheck(exists=True, existing_value=row[_DISPLAY_COLUMN[kind]])

    def ensure_unique_life_area_name(
        self, user_id: str, name: str, *, excluding_id: str | None = None
    ) -> None:
        check = self.check_case_insensitive_duplicate(
            user_id, EntityKind.LIFE_AREA, name, excluding_id=excluding_id
        )
        if check.exists:
            raise DuplicateError(messages.life_area_name_taken(check.existing_value))

    def ensure_unique_task_title(
        self,
        user_id: str,
        week_start: datetime,
        title: str,
        *,
        excluding_id: str | None = None,
    ) -> None:
        check = self.check_case_insensitive_duplicate(
            user_id,
            EntityKind.WEEKLY_TASK,
            title,
            excluding_id=excluding_id,
            week_start=week_start,
        )
        if check.exists:
            raise DuplicateError(
                messages.task_title_taken(check.existing_value, format_calendar_date(week_start))
            )

    # --- Goal linkage ---

    def validate_goal_linkage(self, goal_id: str, week_start: datetime, user_id: str) -> Row:
        """A task may link only to the user's WEEK goal for that same week.

        The goal's target date is placed in its week using the configured
        reference timezone, and that Monday is compared with the calendar
        day the task's week start falls on in the same timezone.
        """
        goal = self.ensure_ownership(user_id, goal_id, EntityKind.GOAL)
        if goal["horizon"] != Horizon.WEEK:
            raise LinkageError(messages.LINKED_GOAL_NOT_WEEKLY)

        target_date = goal.get("target_date")
        if target_date is None:
            return goal

        timezone = self._calendar.timezone
        target_week = local_date(week_start_for(target_date, timezone), timezone)
        task_week = local_date(week_start, timezone)
        if target_week != task_week:
            raise LinkageError(
                messages.linked_goal_week_mismatch(
                    target_week.isoformat(), format_calendar_date(week_start)
                )
            )
        return goal
