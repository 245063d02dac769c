"""Entity input validators.

Each ``validate_*_input`` takes a raw mapping keyed by wire names and
returns ``Ok(data=<record>)`` or ``Err(error=<copy>)``. Fields are checked
in declaration order and the first failure wins; nothing is accumulated.

Create mode (the default) requires every mandatory field and emits every
field, with absent optional ones as None. Partial mode (``partial=True``)
checks only the keys present in *raw* and leaves the rest unset on the
record. A key present with a None value counts as supplied.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from lifeplan.domain import messages
from lifeplan.domain.calendar import (
    DEFAULT_TIMEZONE,
    CalendarDateError,
    NotMondayError,
    parse_calendar_date,
    require_monday,
)
from lifeplan.domain.fields import (
    FieldError,
    bounded_step_number,
    enum_member,
    finite_number,
    hex_color,
    non_empty_trimmed,
    optional_date,
    optional_trimmed,
    uuid_value,
)
from lifeplan.domain.ids import is_uuid
from lifeplan.domain.records import (
    DateRangeFilter,
    FocusThemeRecord,
    GoalRecord,
    LifeAreaRecord,
    SignalRecord,
    WeeklyTaskRecord,
)
from lifeplan.domain.result import Err, Ok, ValidationResult
from lifeplan.domain.types import (
    FOCUS_NOTE_MAX,
    FOCUS_TITLE_MAX,
    GOAL_DESCRIPTION_MAX,
    GOAL_TITLE_MAX,
    LIFE_AREA_NAME_MAX,
    LIFE_AREA_TEXT_MAX,
    MAX_DATE_RANGE_DAYS,
    MAX_LINKED_GOALS,
    SLEEP_MAX,
    SLEEP_MIN,
    SLEEP_STEP,
    TASK_TITLE_MAX,
    WEEKDAYS,
    WELLBEING_MAX,
    WELLBEING_MIN,
    GoalStatus,
    Horizon,
    SignalType,
)

_SECONDS_PER_DAY = 86_400


def _supplied(raw: Mapping[str, Any], key: str, partial: bool) -> bool:
    return not partial or key in raw


# ---------------------------------------------------------------------------
# Shared field checks (raise FieldError)
# ---------------------------------------------------------------------------


def _week_start(value: object, timezone: str) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise FieldError(messages.WEEK_START_REQUIRED)
    try:
        parsed = parse_calendar_date(value)
    except CalendarDateError as exc:
        raise FieldError(messages.WEEK_START_FORMAT) from exc
    try:
        require_monday(parsed, timezone)
    except NotMondayError as exc:
        raise FieldError(messages.WEEK_START_NOT_MONDAY) from exc
    return parsed


def _linked_goals(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list | tuple):
        raise FieldError(messages.LINKED_GOALS_INVALID)
    if len(value) > MAX_LINKED_GOALS:
        raise FieldError(messages.LINKED_GOALS_TOO_MANY)

    cleaned: list[str] = []
    for item in value:
        if not is_uuid(item):
            raise FieldError(messages.LINKED_GOALS_INVALID)
        goal_id = item.strip()
        if goal_id in cleaned:
            raise FieldError(messages.LINKED_GOALS_DUPLICATE)
        cleaned.append(goal_id)
    return tuple(cleaned)


def _signal_type(value: object) -> SignalType:
    if not isinstance(value, str):
        raise FieldError(messages.SIGNAL_TYPE_REQUIRED)
    return enum_member(value.strip(), SignalType, message=messages.SIGNAL_TYPE_INVALID)


def _signal_date(value: object) -> datetime:
    if not isinstance(value, str):
        raise FieldError(messages.SIGNAL_DATE_REQUIRED)
    try:
        return parse_calendar_date(value)
    except CalendarDateError as exc:
        raise FieldError(messages.SIGNAL_DATE_INVALID) from exc


def _signal_value(value: object, signal_type: object) -> int | float:
    number = finite_number(
        value,
        missing=messages.SIGNAL_VALUE_REQUIRED,
        not_finite=messages.SIGNAL_VALUE_NOT_NUMBER,
    )
    if not signal_type:
        raise FieldError(messages.SIGNAL_VALUE_TYPE_MISSING)
    if signal_type == SignalType.SLEEP:
        return bounded_step_number(
            number,
            SLEEP_MIN,
            SLEEP_MAX,
            SLEEP_STEP,
            missing=messages.SIGNAL_VALUE_REQUIRED,
            not_finite=messages.SIGNAL_VALUE_NOT_NUMBER,
            above_max=messages.SLEEP_TOO_HIGH,
            off_grid=messages.SLEEP_INCREMENT,
        )
    if signal_type == SignalType.WELLBEING:
        return bounded_step_number(
            number,
            WELLBEING_MIN,
            WELLBEING_MAX,
            1,
            missing=messages.SIGNAL_VALUE_REQUIRED,
            not_finite=messages.SIGNAL_VALUE_NOT_NUMBER,
            above_max=messages.WELLBEING_INVALID,
            off_grid=messages.WELLBEING_INVALID,
        )
    raise FieldError(messages.SIGNAL_VALUE_TYPE_UNKNOWN)


# ---------------------------------------------------------------------------
# Standalone validators
# ---------------------------------------------------------------------------


def validate_week_start(
    value: object, *, timezone: str = DEFAULT_TIMEZONE
) -> ValidationResult[datetime]:
    """Validate a week-start date string; success carries its UTC midnight."""
    try:
        return Ok(data=_week_start(value, timezone))
    except FieldError as exc:
        return Err(error=exc.message)


def validate_linked_goals(value: object) -> ValidationResult[tuple[str, ...]]:
    """Validate 0-3 unique UUIDv4 goal IDs; None means no links."""
    try:
        return Ok(data=_linked_goals(value))
    except FieldError as exc:
        return Err(error=exc.message)


def validate_signal_type(value: object) -> ValidationResult[SignalType]:
    try:
        return Ok(data=_signal_type(value))
    except FieldError as exc:
        return Err(error=exc.message)


def validate_signal_date(value: object) -> ValidationResult[datetime]:
    try:
        return Ok(data=_signal_date(value))
    except FieldError as exc:
        return Err(error=exc.message)


def validate_signal_value(value: object, signal_type: object) -> ValidationResult[int | float]:
    """Validate a signal value against the rules of *signal_type*."""
    try:
        return Ok(data=_signal_value(value, signal_type))
    except FieldError as exc:
        return Err(error=exc.message)


def validate_date_range(filters: Mapping[str, Any]) -> ValidationResult[DateRangeFilter]:
    """Validate signal list filters (``type``, ``from``, ``to``).

    Only present keys are checked. When both bounds are given, ``from``
    must not be after ``to`` and the span may not exceed 400 days.
    """
    data: dict[str, Any] = {}
    try:
        if "type" in filters:
            data["type"] = _signal_type(filters["type"])
        if "from" in filters:
            data["from_"] = _signal_date(filters["from"])
        if "to" in filters:
            data["to"] = _signal_date(filters["to"])
    except FieldError as exc:
        return Err(error=exc.message)

    start, end = data.get("from_"), data.get("to")
    if start is not None and end is not None:
        if start > end:
            return Err(error=messages.DATE_RANGE_INVERTED)
        days = math.ceil((end - start).total_seconds() / _SECONDS_PER_DAY)
        if days > MAX_DATE_RANGE_DAYS:
            return Err(error=messages.DATE_RANGE_TOO_LONG)
    return Ok(data=DateRangeFilter(**data))


# ---------------------------------------------------------------------------
# Entity validators
# ---------------------------------------------------------------------------


def validate_life_area_input(
    raw: Mapping[str, Any], *, partial: bool = False
) -> ValidationResult[LifeAreaRecord]:
    """Validate name, color, vision and strategy; ``order`` passes through unchecked."""
    data: dict[str, Any] = {}
    try:
        if _supplied(raw, "name", partial):
            data["name"] = non_empty_trimmed(
                raw.get("name"),
                LIFE_AREA_NAME_MAX,
                empty=messages.LIFE_AREA_NAME_EMPTY,
                too_long=messages.LIFE_AREA_NAME_TOO_LONG,
            )
        if _supplied(raw, "color", partial):
            data["color"] = hex_color(raw.get("color"), message=messages.COLOR_INVALID)
        if _supplied(raw, "vision", partial):
            data["vision"] = optional_trimmed(
                raw.get("vision"),
                LIFE_AREA_TEXT_MAX,
                empty=messages.VISION_EMPTY,
                too_long=messages.VISION_TOO_LONG,
            )
        if _supplied(raw, "strategy", partial):
            data["strategy"] = optional_trimmed(
                raw.get("strategy"),
                LIFE_AREA_TEXT_MAX,
                empty=messages.STRATEGY_EMPTY,
                too_long=messages.STRATEGY_TOO_LONG,
            )
    except FieldError as exc:
        return Err(error=exc.message)

    if "order" in raw:
        data["order"] = raw["order"]
    return Ok(data=LifeAreaRecord(**data))


def validate_goal_input(
    raw: Mapping[str, Any], *, partial: bool = False
) -> ValidationResult[GoalRecord]:
    data: dict[str, Any] = {}
    try:
        if _supplied(raw, "title", partial):
            data["title"] = non_empty_trimmed(
                raw.get("title"),
                GOAL_TITLE_MAX,
                empty=messages.GOAL_TITLE_EMPTY,
                too_long=messages.GOAL_TITLE_TOO_LONG,
            )
        if _supplied(raw, "description", partial):
            data["description"] = optional_trimmed(
                raw.get("description"),
                GOAL_DESCRIPTION_MAX,
                empty=messages.DESCRIPTION_EMPTY,
                too_long=messages.DESCRIPTION_TOO_LONG,
            )
        if _supplied(raw, "horizon", partial):
            data["horizon"] = enum_member(
                raw.get("horizon"), Horizon, message=messages.HORIZON_INVALID
            )
        if _supplied(raw, "status", partial):
            data["status"] = enum_member(
                raw.get("status"), GoalStatus, message=messages.STATUS_INVALID
            )
        if _supplied(raw, "targetDate", partial):
            data["target_date"] = optional_date(
                raw.get("targetDate"), message=messages.TARGET_DATE_INVALID
            )
        if _supplied(raw, "lifeAreaId", partial):
            data["life_area_id"] = uuid_value(
                raw.get("lifeAreaId"), message=messages.LIFE_AREA_ID_INVALID
            )
    except FieldError as exc:
        return Err(error=exc.message)
    return Ok(data=GoalRecord(**data))


def validate_weekly_task_input(
    raw: Mapping[str, Any],
    *,
    partial: bool = False,
    timezone: str = DEFAULT_TIMEZONE,
) -> ValidationResult[WeeklyTaskRecord]:
    """Validate title, week start, the seven day flags and the goal link.

    The Monday check observes the week start's weekday in *timezone*.
    """
    data: dict[str, Any] = {}
    try:
        if _supplied(raw, "title", partial):
            data["title"] = non_empty_trimmed(
                raw.get("title"),
                TASK_TITLE_MAX,
                empty=messages.TASK_TITLE_EMPTY,
                too_long=messages.TASK_TITLE_TOO_LONG,
            )
        if _supplied(raw, "weekStart", partial):
            data["week_start"] = _week_start(raw.get("weekStart"), timezone)
        for day in WEEKDAYS:
            if not _supplied(raw, day, partial):
                continue
            flag = raw.get(day)
            if flag is None:
                raise FieldError(messages.day_required(day))
            if not isinstance(flag, bool):
                raise FieldError(messages.day_not_boolean(day))
            data[day] = flag
        if _supplied(raw, "goalId", partial):
            data["goal_id"] = uuid_value(raw.get("goalId"), message=messages.GOAL_ID_INVALID)
    except FieldError as exc:
        return Err(error=exc.message)
    return Ok(data=WeeklyTaskRecord(**data))


def validate_focus_theme_input(
    raw: Mapping[str, Any],
    *,
    partial: bool = False,
    timezone: str = DEFAULT_TIMEZONE,
) -> ValidationResult[FocusThemeRecord]:
    """Validate a weekly focus theme; a blank note becomes None."""
    data: dict[str, Any] = {}
    try:
        if _supplied(raw, "title", partial):
            data["title"] = non_empty_trimmed(
                raw.get("title"),
                FOCUS_TITLE_MAX,
                empty=messages.FOCUS_TITLE_EMPTY,
                too_long=messages.FOCUS_TITLE_TOO_LONG,
            )
        if _supplied(raw, "note", partial):
            data["note"] = optional_trimmed(
                raw.get("note"), FOCUS_NOTE_MAX, too_long=messages.FOCUS_NOTE_TOO_LONG
            )
        if _supplied(raw, "weekStart", partial):
            data["week_start"] = _week_start(raw.get("weekStart"), timezone)
        if _supplied(raw, "linkedGoals", partial):
            data["linked_goals"] = _linked_goals(raw.get("linkedGoals"))
    except FieldError as exc:
        return Err(error=exc.message)
    return Ok(data=FocusThemeRecord(**data))


def validate_signal_input(
    raw: Mapping[str, Any],
    *,
    partial: bool = False,
    current_type: SignalType | str | None = None,
) -> ValidationResult[SignalRecord]:
    """Validate a daily signal.

    The value is checked against the validated type, else the raw type,
    else *current_type* (the stored type when a partial update changes
    only the value).
    """
    data: dict[str, Any] = {}
    try:
        if _supplied(raw, "type", partial):
            data["type"] = _signal_type(raw.get("type"))
        if _supplied(raw, "date", partial):
            data["date"] = _signal_date(raw.get("date"))
        if _supplied(raw, "value", partial):
            context_type = data.get("type") or raw.get("type") or current_type
            data["value"] = _signal_value(raw.get("value"), context_type)
    except FieldError as exc:
        return Err(error=exc.message)
    return Ok(data=SignalRecord(**data))
