"""Planner schema, engine setup, storage adapter and error mapping via SQLAlchemy Core."""

from lifeplan.infrastructure.database.engine import create_db_engine, init_database
from lifeplan.infrastructure.database.errors import (
    classify_storage_error,
    get_constraint_name,
    is_unique_violation,
    map_storage_error,
)
from lifeplan.infrastructure.database.schema import (
    goals,
    life_areas,
    metadata,
    signals,
    weekly_focus_theme_goals,
    weekly_focus_themes,
    weekly_tasks,
)
from lifeplan.infrastructure.database.storage import SqlStorage

__all__ = [
    "SqlStorage",
    "classify_storage_error",
    "create_db_engine",
    "get_constraint_name",
    "goals",
    "init_database",
    "is_unique_violation",
    "life_areas",
    "map_storage_error",
    "metadata",
    "signals",
    "weekly_focus_theme_goals",
    "weekly_focus_themes",
    "weekly_tasks",
]
