"""Normalized records produced by the entity validators.

Attributes are snake_case; aliases are the camelCase wire names used in
raw input (``weekStart``, ``lifeAreaId``, ...). Every field has a default,
so partial-mode records carry only what the caller supplied, and
``model_fields_set`` is the "field present" marker. :meth:`to_payload`
re-serializes exactly those fields back to the raw shape, with instants
rendered as ``YYYY-MM-DD``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from lifeplan.domain.calendar import format_calendar_date
from lifeplan.domain.types import GoalStatus, Horizon, SignalType

CalendarInstant = Annotated[
    datetime,
    PlainSerializer(format_calendar_date, return_type=str, when_used="json"),
]


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Raw-shaped mapping of the fields that are present."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class LifeAreaRecord(_Record):
    name: str | None = None
    color: str | None = None
    vision: str | None = None
    strategy: str | None = None
    order: Any = None


class GoalRecord(_Record):
    title: str | None = None
    description: str | None = None
    horizon: Horizon | None = None
    status: GoalStatus | None = None
    target_date: CalendarInstant | None = None
    life_area_id: str | None = None


class WeeklyTaskRecord(_Record):
    title: str | None = None
    week_start: CalendarInstant | None = None
    monday: bool | None = None
    tuesday: bool | None = None
    wednesday: bool | None = None
    thursday: bool | None = None
    friday: bool | None = None
    saturday: bool | None = None
    sunday: bool | None = None
    goal_id: str | None = None


class FocusThemeRecord(_Record):
    title: str | None = None
    note: str | None = None
    week_start: CalendarInstant | None = None
    linked_goals: tuple[str, ...] | None = None


class SignalRecord(_Record):
    type: SignalType | None = None
    date: CalendarInstant | None = None
    value: int | float | None = None


class DateRangeFilter(_Record):
    """Validated signal list filters; absent bounds stay unset."""

    type: SignalType | None = None
    from_: CalendarInstant | None = Field(default=None, alias="from")
    to: CalendarInstant | None = None


class ErrorContext(_Record):
    """Interpolation values for storage-conflict copy.

    Missing values are replaced by placeholder words ("that name",
    "this task", "this week") when the message is rendered.
    """

    title: str | None = None
    week_start: str | None = None
    life_area_name: str | None = None

    @field_validator("week_start", mode="before")
    @classmethod
    def _format_instant(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return format_calendar_date(value)
        return value
