"""User-facing copy shared by validators, invariant checks and the storage-error mapper.

Every string a user can see lives here so that a conflict caught by a
validator and the same conflict caught at commit time read identically.
"""

from __future__ import annotations

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
    TASK_TITLE_MAX,
    EntityKind,
    GoalStatus,
    Horizon,
)

# --- Life areas ---

LIFE_AREA_NAME_EMPTY = "Name can't be empty"
LIFE_AREA_NAME_TOO_LONG = f"Life area name can't exceed {LIFE_AREA_NAME_MAX} characters"
COLOR_INVALID = "Color must be exactly 6 hex digits after # (e.g., #FF6B35)"
VISION_EMPTY = "Vision can't be empty when provided"
VISION_TOO_LONG = f"Vision can't exceed {LIFE_AREA_TEXT_MAX} characters"
STRATEGY_EMPTY = "Strategy can't be empty when provided"
STRATEGY_TOO_LONG = f"Strategy can't exceed {LIFE_AREA_TEXT_MAX} characters"

# --- Goals ---

GOAL_TITLE_EMPTY = "Goal title can't be empty"
GOAL_TITLE_TOO_LONG = f"Goal title can't exceed {GOAL_TITLE_MAX} characters"
DESCRIPTION_EMPTY = "Description can't be empty when provided"
DESCRIPTION_TOO_LONG = f"Description can't exceed {GOAL_DESCRIPTION_MAX} characters"
HORIZON_INVALID = f"Horizon must be one of: {', '.join(Horizon)}"
STATUS_INVALID = f"Status must be one of: {', '.join(GoalStatus)}"
TARGET_DATE_INVALID = "Target date must be in YYYY-MM-DD format"
LIFE_AREA_ID_INVALID = "Life area ID must be a valid UUID"

# --- Weekly tasks ---

TASK_TITLE_EMPTY = "Task title can't be empty"
TASK_TITLE_TOO_LONG = f"Task title can't exceed {TASK_TITLE_MAX} characters"
WEEK_START_REQUIRED = "Week start date is required"
WEEK_START_FORMAT = "Week start must be in YYYY-MM-DD format"
WEEK_START_NOT_MONDAY = "Week start must be a Monday"
GOAL_ID_INVALID = "Goal ID must be a valid UUID"


def day_required(day: str) -> str:
    """``"Monday is required"`` for the ``monday`` flag."""
    return f"{day.capitalize()} is required"


def day_not_boolean(day: str) -> str:
    return f"{day.capitalize()} must be true or false"


# --- Weekly focus themes ---

FOCUS_TITLE_EMPTY = "Focus title can't be empty"
FOCUS_TITLE_TOO_LONG = f"Focus title can't exceed {FOCUS_TITLE_MAX} characters"
FOCUS_NOTE_TOO_LONG = f"Focus note can't exceed {FOCUS_NOTE_MAX} characters"

# --- Linked goals ---

LINKED_GOALS_INVALID = "All goal IDs must be valid UUIDs"
LINKED_GOALS_TOO_MANY = f"Can't link more than {MAX_LINKED_GOALS} goals"
LINKED_GOALS_DUPLICATE = "Can't link the same goal multiple times"

# --- Signals ---

SIGNAL_TYPE_REQUIRED = "Signal type is required"
SIGNAL_TYPE_INVALID = "Signal type must be SLEEP or WELLBEING"
SIGNAL_DATE_REQUIRED = "Date is required"
SIGNAL_DATE_INVALID = "Date must be valid"
SIGNAL_VALUE_REQUIRED = "Signal value is required"
SIGNAL_VALUE_NOT_NUMBER = "Signal value must be a valid number"
SIGNAL_VALUE_TYPE_MISSING = "Signal type is required for value validation"
SIGNAL_VALUE_TYPE_UNKNOWN = "Invalid signal type for value validation"
SLEEP_TOO_HIGH = f"Sleep hours can't exceed {SLEEP_MAX}"
SLEEP_INCREMENT = "Sleep hours must be in 0.25-hour increments (7.25, 7.50, 7.75, etc.)"
WELLBEING_INVALID = "Wellbeing must be a whole number between 1 and 10"

# --- Date range filters ---

DATE_RANGE_INVERTED = "From date must be before or equal to to date"
DATE_RANGE_TOO_LONG = f"Date range cannot exceed {MAX_DATE_RANGE_DAYS} days"

# --- Soft limits ---


def active_goal_cap(cap: int) -> str:
    return (
        f"You have {cap} active goals already. "
        "Complete or pause some goals before adding new ones to maintain focus."
    )


def weekly_task_cap(cap: int) -> str:
    return (
        f"You can't have more than {cap} tasks per week. "
        "Focus on the most important habits first."
    )


def life_area_cap(cap: int) -> str:
    return (
        f"You've reached the maximum of {cap} life areas. "
        "Consider consolidating similar areas to stay focused."
    )


def weekly_task_minimum(minimum: int) -> str:
    return f"Add at least {minimum} weekly tasks to build momentum and consistency."


# --- Goal linkage ---

LINKED_GOAL_NOT_WEEKLY = "Goal must have horizon WEEK to link to weekly tasks"


def linked_goal_week_mismatch(target_week: str, week_start: str) -> str:
    return f"Goal target date is for week {target_week}, but task is for week {week_start}"


# --- Not found ---

_KIND_LABELS: dict[EntityKind, str] = {
    EntityKind.LIFE_AREA: "Life area",
    EntityKind.GOAL: "Goal",
    EntityKind.WEEKLY_TASK: "Weekly task",
    EntityKind.FOCUS_THEME: "Focus theme",
    EntityKind.SIGNAL: "Signal",
}


def not_found(kind: EntityKind) -> str:
    """``"Goal not found"`` and friends; the same copy whether absent or foreign."""
    return f"{_KIND_LABELS[kind]} not found"


# --- Storage conflicts ---


def life_area_name_taken(name: str | None = None) -> str:
    return f"You already have a life area named '{name or 'that name'}'"


def task_title_taken(title: str | None = None, week_start: str | None = None) -> str:
    return (
        f"You already have a task called '{title or 'this task'}' "
        f"for the week of {week_start or 'this week'}"
    )


def focus_week_taken(week_start: str | None = None) -> str:
    return f"You already set a focus for the week of {week_start or 'this week'}"


GENERIC_ERROR = "Something went wrong. Please try again."
