"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, lifeplan.toml only contains
overrides. An empty file (or none at all) yields the product defaults.
"""

from __future__ import annotations

from zoneinfo import available_timezones

from pydantic import BaseModel, Field, PositiveInt, field_validator

from lifeplan.domain.calendar import DEFAULT_TIMEZONE
from lifeplan.domain.types import (
    ACTIVE_GOAL_CAP,
    LIFE_AREA_CAP,
    WEEKLY_TASK_CAP,
    WEEKLY_TASK_MINIMUM,
)

# --- lifeplan.toml sections ---


class CalendarConfig(BaseModel):
    """[calendar] section."""

    model_config = {"frozen": True}

    timezone: str = DEFAULT_TIMEZONE

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value not in available_timezones():
            msg = f"Unknown IANA timezone: {value!r}"
            raise ValueError(msg)
        return value


class LimitsConfig(BaseModel):
    """[limits] section: soft caps enforced at write time."""

    model_config = {"frozen": True}

    active_goals: PositiveInt = ACTIVE_GOAL_CAP
    tasks_per_week: PositiveInt = WEEKLY_TASK_CAP
    min_tasks_per_week: int = Field(default=WEEKLY_TASK_MINIMUM, ge=0)
    life_areas: PositiveInt = LIFE_AREA_CAP


# --- Root config ---


class LifeplanConfig(BaseModel):
    """Root model for lifeplan.toml."""

    model_config = {"frozen": True}

    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
