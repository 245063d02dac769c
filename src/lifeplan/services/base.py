"""BaseService: shared foundation for the transactional checks.

Every service is constructed around a :class:`StoragePort` bound to the
caller's open transaction. Services never open, commit or roll back
transactions themselves; an :class:`InvariantError` raised out of a
service method rolls back the caller's transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lifeplan.config.models import CalendarConfig, LimitsConfig

if TYPE_CHECKING:
    from lifeplan.config.settings import LifeplanSettings
    from lifeplan.services.ports import StoragePort


class BaseService:
    """Base for service-layer classes.

    Usage::

        with database.transaction() as storage:
            InvariantService(storage, settings).enforce_active_goal_cap(user_id)
            ...
    """

    def __init__(self, storage: StoragePort, settings: LifeplanSettings | None = None) -> None:
        self._storage = storage
        self._settings = settings
        self._limits = settings.limits if settings else LimitsConfig()
        self._calendar = settings.calendar if settings else CalendarConfig()
