"""Storage-error classifier and user-copy mapper.

A write can still fail on a constraint after validation passed (two
requests racing to create the same name). This module turns such
failures into the same copy the validators and invariant checks use, so
users cannot tell "caught early" from "caught at commit".

Accepted error shapes:

- mappings or objects with ``code``, ``constraint``, ``meta.target``
  (column list) and ``meta.constraint`` fields;
- SQLAlchemy ``DBAPIError`` wrappers, unwrapped to the driver error:
  psycopg ``sqlstate``/``pgcode`` with ``diag.constraint_name``, and
  SQLite ``UNIQUE constraint failed: t.a, t.b`` /
  ``CHECK constraint failed: name`` messages.

Anything unrecognized maps to the generic copy. Identifiers, column names
and driver messages never reach the returned string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError

from lifeplan.domain import messages
from lifeplan.domain.records import ErrorContext

logger = logging.getLogger(__name__)

PRISMA_UNIQUE = "P2002"
PG_UNIQUE = "23505"
PG_CHECK = "23514"

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)")
_SQLITE_CHECK = re.compile(r"CHECK constraint failed: (?P<name>\w+)")


class ViolationKind(StrEnum):
    UNIQUE = "unique"
    CHECK = "check"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StorageViolation:
    """What a storage error says about itself, independent of its shape."""

    kind: ViolationKind
    code: str | None = None
    constraint: str | None = None
    columns: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Copy tables
# ---------------------------------------------------------------------------

_Render: TypeAlias = Callable[[ErrorContext], str]


def _life_area_name(ctx: ErrorContext) -> str:
    return messages.life_area_name_taken(ctx.life_area_name)


def _task_title(ctx: ErrorContext) -> str:
    return messages.task_title_taken(ctx.title, ctx.week_start)


def _focus_week(ctx: ErrorContext) -> str:
    return messages.focus_week_taken(ctx.week_start)


def _duplicate_link(_: ErrorContext) -> str:
    return messages.LINKED_GOALS_DUPLICATE


# Keys are normalized column lists (see normalize_columns).
UNIQUE_BY_COLUMNS: dict[str, _Render] = {
    "userid,namenorm": _life_area_name,
    "userid,weekstart,titlenorm": _task_title,
    "userid,weekstart": _focus_week,
    "weeklyfocusthemeid,goalid": _duplicate_link,
}

UNIQUE_BY_CONSTRAINT: dict[str, _Render] = {
    "uniq_lifearea_user_namenorm": _life_area_name,
    "uniq_weeklytask_user_week_title": _task_title,
    "uniq_focus_user_week": _focus_week,
    "uniq_focus_goal_link": _duplicate_link,
}

CHECK_BY_CONSTRAINT: dict[str, str] = {
    "chk_signal_sleep_bounds": messages.SLEEP_TOO_HIGH,
    "chk_signal_sleep_quarter": messages.SLEEP_INCREMENT,
    "chk_signal_wellbeing_range": messages.WELLBEING_INVALID,
    "chk_signal_wellbeing_int": messages.WELLBEING_INVALID,
}


# ---------------------------------------------------------------------------
# Shape inspection
# ---------------------------------------------------------------------------


def _field(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def normalize_columns(columns: Sequence[str]) -> str:
    """``["life_areas.user_id", "name_norm"]`` -> ``"userid,namenorm"``."""
    return ",".join(
        column.strip().rsplit(".", 1)[-1].replace("_", "").lower() for column in columns
    )


def _driver_violation(orig: Any) -> StorageViolation:
    """Describe a DB-API exception raised by psycopg or sqlite3."""
    code = _text(_field(orig, "sqlstate")) or _text(_field(orig, "pgcode"))
    constraint = _text(_field(_field(orig, "diag"), "constraint_name"))
    if code == PG_UNIQUE:
        return StorageViolation(ViolationKind.UNIQUE, code=code, constraint=constraint)
    if code == PG_CHECK:
        return StorageViolation(ViolationKind.CHECK, code=code, constraint=constraint)

    message = str(orig)
    if match := _SQLITE_UNIQUE.search(message):
        columns = tuple(part.strip() for part in match["columns"].split(","))
        return StorageViolation(ViolationKind.UNIQUE, code=code, columns=columns)
    if match := _SQLITE_CHECK.search(message):
        return StorageViolation(ViolationKind.CHECK, code=code, constraint=match["name"])
    return StorageViolation(ViolationKind.UNKNOWN, code=code, constraint=constraint)


def get_constraint_name(err: object) -> str | None:
    """Constraint identifier carried by *err*: ``constraint``, else ``meta.constraint``."""
    if isinstance(err, DBAPIError):
        return _driver_violation(err.orig).constraint
    if err is None or isinstance(err, str | bytes | int | float | bool):
        return None
    return _text(_field(err, "constraint")) or _text(_field(_field(err, "meta"), "constraint"))


def classify_storage_error(err: object) -> StorageViolation:
    """Classify *err* as a unique violation, a check violation, or unknown.

    Order: ``P2002`` with a column list; ``23505`` with a constraint name;
    ``23514`` with a constraint name; then any constraint name at all,
    treated as a named unique constraint.
    """
    if isinstance(err, DBAPIError):
        return _driver_violation(err.orig)
    if err is None or isinstance(err, str | bytes | int | float | bool):
        return StorageViolation(ViolationKind.UNKNOWN)

    code = _text(_field(err, "code"))
    target = _field(_field(err, "meta"), "target")
    if code == PRISMA_UNIQUE and isinstance(target, list | tuple):
        columns = tuple(str(column) for column in target)
        return StorageViolation(ViolationKind.UNIQUE, code=code, columns=columns)

    constraint = _text(_field(err, "constraint"))
    if code == PG_UNIQUE and constraint:
        return StorageViolation(ViolationKind.UNIQUE, code=code, constraint=constraint)
    if code == PG_CHECK and constraint:
        return StorageViolation(ViolationKind.CHECK, code=code, constraint=constraint)

    constraint = get_constraint_name(err)
    if constraint:
        return StorageViolation(ViolationKind.UNIQUE, code=code, constraint=constraint)
    return StorageViolation(ViolationKind.UNKNOWN, code=code)


def is_unique_violation(err: object) -> bool:
    """True for Prisma ``P2002``, Postgres ``23505`` and SQLite UNIQUE failures."""
    if isinstance(err, DBAPIError):
        return _driver_violation(err.orig).kind is ViolationKind.UNIQUE
    if err is None or isinstance(err, str | bytes | int | float | bool):
        return False
    return _text(_field(err, "code")) in (PRISMA_UNIQUE, PG_UNIQUE)


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def _context(context: ErrorContext | Mapping[str, Any] | None) -> ErrorContext:
    if context is None:
        return ErrorContext()
    if isinstance(context, ErrorContext):
        return context
    try:
        return ErrorContext.model_validate(dict(context))
    except ValidationError:
        logger.debug("Unusable error context keys: %s", sorted(context))
        return ErrorContext()


def _render(violation: StorageViolation, ctx: ErrorContext) -> str | None:
    if violation.kind is ViolationKind.CHECK:
        return CHECK_BY_CONSTRAINT.get(violation.constraint or "")
    if violation.kind is ViolationKind.UNIQUE:
        if violation.columns:
            render = UNIQUE_BY_COLUMNS.get(normalize_columns(violation.columns))
        else:
            render = UNIQUE_BY_CONSTRAINT.get(violation.constraint or "")
        return render(ctx) if render else None
    return None


def map_storage_error(
    err: object, context: ErrorContext | Mapping[str, Any] | None = None
) -> str:
    """Return user copy for a storage error; the generic copy when unmapped.

    *context* supplies interpolation values (``title``, ``weekStart``,
    ``lifeAreaName``); missing values fall back to placeholder words.
    """
    violation = classify_storage_error(err)
    copy = _render(violation, _context(context))
    if copy is None:
        logger.debug(
            "Unmapped storage error: kind=%s code=%s constraint=%s",
            violation.kind,
            violation.code,
            violation.constraint,
        )
        return messages.GENERIC_ERROR
    return copy
