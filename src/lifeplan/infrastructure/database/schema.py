"""SQLAlchemy Core table definitions for the planner database.

Unique and check constraints carry stable names; the storage-error mapper
in :mod:`lifeplan.infrastructure.database.errors` keys its copy on those
names and on the column lists behind them. ``name_norm`` and
``title_norm`` are generated ``lower(trim(...))`` columns backing the
case-insensitive uniqueness rules.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Computed,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware UTC instants on every backend.

    SQLite has no offset-aware storage, so values are written there as
    naive UTC and re-tagged as UTC on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        value = value.astimezone(UTC)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


metadata = MetaData()

life_areas = Table(
    "life_areas",
    metadata,
    Column("id", Text, primary_key=True),
    Column("user_id", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("name_norm", Text, Computed("lower(trim(name))", persisted=True)),
    Column("color", Text),
    Column("vision", Text),
    Column("strategy", Text),
    Column("order", Integer, nullable=False),
    UniqueConstraint("user_id", "name_norm", name="uniq_lifearea_user_namenorm"),
)

goals = Table(
    "goals",
    metadata,
    Column("id", Text, primary_key=True),
    Column("user_id", Text, nullable=False),
    Column("life_area_id", Text, ForeignKey("life_areas.id")),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("horizon", Text, nullable=False),
    Column("status", Text, nullable=False),
    Column("target_date", UTCDateTime),
)

weekly_tasks = Table(
    "weekly_tasks",
    metadata,
    Column("id", Text, primary_key=True),
    Column("user_id", Text, nullable=False),
    Column("goal_id", Text, ForeignKey("goals.id")),
    Column("title", Text, nullable=False),
    Column("title_norm", Text, Computed("lower(trim(title))", persisted=True)),
    Column("week_start", UTCDateTime, nullable=False),
    Column("monday", Boolean, nullable=False),
    Column("tuesday", Boolean, nullable=False),
    Column("wednesday", Boolean, nullable=False),
    Column("thursday", Boolean, nullable=False),
    Column("friday", Boolean, nullable=False),
    Column("saturday", Boolean, nullable=False),
    Column("sunday", Boolean, nullable=False),
    UniqueConstraint(
        "user_id", "week_start", "title_norm", name="uniq_weeklytask_user_week_title"
    ),
)

weekly_focus_themes = Table(
    "weekly_focus_themes",
    metadata,
    Column("id", Text, primary_key=True),
    Column("user_id", Text, nullable=False),
    Column("title", Text, nullable=False),
    Column("note", Text),
    Column("week_start", UTCDateTime, nullable=False),
    UniqueConstraint("user_id", "week_start", name="uniq_focus_user_week"),
)

weekly_focus_theme_goals = Table(
    "weekly_focus_theme_goals",
    metadata,
    Column(
        "weekly_focus_theme_id",
        Text,
        ForeignKey("weekly_focus_themes.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("goal_id", Text, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False),
    UniqueConstraint("weekly_focus_theme_id", "goal_id", name="uniq_focus_goal_link"),
)

signals = Table(
    "signals",
    metadata,
    Column("id", Text, primary_key=True),
    Column("user_id", Text, nullable=False),
    Column("type", Text, nullable=False),
    Column("date", UTCDateTime, nullable=False),
    Column("value", Float, nullable=False),
    UniqueConstraint("user_id", "date", "type", name="uniq_signal_user_date_type"),
    CheckConstraint(
        "type != 'SLEEP' OR (value >= 0 AND value <= 14)", name="chk_signal_sleep_bounds"
    ),
    CheckConstraint(
        "type != 'SLEEP' OR value * 4 = CAST(value * 4 AS INTEGER)",
        name="chk_signal_sleep_quarter",
    ),
    CheckConstraint(
        "type != 'WELLBEING' OR (value >= 1 AND value <= 10)",
        name="chk_signal_wellbeing_range",
    ),
    CheckConstraint(
        "type != 'WELLBEING' OR value = CAST(value AS INTEGER)",
        name="chk_signal_wellbeing_int",
    ),
)

# --- Indexes ---

Index("ix_life_areas_user_order", life_areas.c.user_id, life_areas.c["order"])
Index("ix_goals_user_status", goals.c.user_id, goals.c.status)
Index("ix_weekly_tasks_user_week", weekly_tasks.c.user_id, weekly_tasks.c.week_start)
Index("ix_weekly_tasks_goal", weekly_tasks.c.goal_id)
Index("ix_signals_user_date", signals.c.user_id, signals.c.date)
