"""Entity kinds, enumerations, and field limits for planner entities.

Enum members are declared in the order they are listed to users, so
``", ".join(Horizon)`` renders the "must be one of" copy directly.
"""

from __future__ import annotations

from enum import StrEnum

# --- Entity kinds ---


class EntityKind(StrEnum):
    """Persistent entity kinds the engine validates and checks."""

    LIFE_AREA = "life_area"
    GOAL = "goal"
    WEEKLY_TASK = "weekly_task"
    FOCUS_THEME = "weekly_focus_theme"
    SIGNAL = "signal"


# --- Goal enums ---


class Horizon(StrEnum):
    """Time scale of a goal."""

    YEAR = "YEAR"
    SIX_MONTH = "SIX_MONTH"
    MONTH = "MONTH"
    WEEK = "WEEK"


class GoalStatus(StrEnum):
    """Progress state of a goal. Only ``active`` goals count toward the cap."""

    ACTIVE = "active"
    PAUSED = "paused"
    DONE = "done"


# --- Signal enums ---


class SignalType(StrEnum):
    """Daily signal kinds."""

    SLEEP = "SLEEP"
    WELLBEING = "WELLBEING"


# --- Weekly task day flags (Monday first) ---

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# --- String length limits ---

LIFE_AREA_NAME_MAX = 50
LIFE_AREA_TEXT_MAX = 500  # vision and strategy
GOAL_TITLE_MAX = 100
GOAL_DESCRIPTION_MAX = 1000
TASK_TITLE_MAX = 80
FOCUS_TITLE_MAX = 60
FOCUS_NOTE_MAX = 400

# --- Numeric bounds ---

SLEEP_MIN = 0
SLEEP_MAX = 14
SLEEP_STEP = 0.25
WELLBEING_MIN = 1
WELLBEING_MAX = 10

# --- Collection and range limits ---

MAX_LINKED_GOALS = 3
MAX_DATE_RANGE_DAYS = 400
DEFAULT_RANGE_DAYS = 30

# --- Soft limits (defaults; overridable via [limits] config) ---

ACTIVE_GOAL_CAP = 12
WEEKLY_TASK_CAP = 7
WEEKLY_TASK_MINIMUM = 2  # advisory only
LIFE_AREA_CAP = 12
