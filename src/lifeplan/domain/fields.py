"""Field-level primitives shared by the entity validators.

Each primitive returns the normalized value or raises :class:`FieldError`
carrying the caller-supplied message. Entity validators run primitives in
field order and stop at the first ``FieldError``.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from enum import StrEnum
from typing import TypeVar

from lifeplan.domain.calendar import CalendarDateError, parse_calendar_date
from lifeplan.domain.ids import is_uuid

E = TypeVar("E", bound=StrEnum)

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


class FieldError(ValueError):
    """A single field failed validation; ``message`` is user-facing copy."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _trimmed_or_none(value: object, message: str) -> str | None:
    """None and blank strings collapse to None; other non-strings fail."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise FieldError(message)
    return value.strip() or None


def non_empty_trimmed(value: object, max_len: int, *, empty: str, too_long: str) -> str:
    """Required text: trimmed, at least one character, at most *max_len*."""
    trimmed = value.strip() if isinstance(value, str) else ""
    if not trimmed:
        raise FieldError(empty)
    if len(trimmed) > max_len:
        raise FieldError(too_long)
    return trimmed


def optional_trimmed(
    value: object,
    max_len: int,
    *,
    too_long: str,
    empty: str | None = None,
) -> str | None:
    """Optional text: None stays None, length is bounded when present.

    A blank string collapses to None, unless *empty* is given, in which
    case the field must be non-empty if provided at all.
    """
    if value is None:
        return None
    trimmed = _trimmed_or_none(value, empty or too_long)
    if trimmed is None:
        if empty is not None:
            raise FieldError(empty)
        return None
    if len(trimmed) > max_len:
        raise FieldError(too_long)
    return trimmed


def hex_color(value: object, *, message: str) -> str | None:
    """``#`` followed by exactly six hex digits, either case."""
    trimmed = _trimmed_or_none(value, message)
    if trimmed is not None and _HEX_COLOR.fullmatch(trimmed) is None:
        raise FieldError(message)
    return trimmed


def uuid_value(value: object, *, message: str) -> str | None:
    """Optional UUIDv4 reference; blank means no reference."""
    trimmed = _trimmed_or_none(value, message)
    if trimmed is not None and not is_uuid(trimmed):
        raise FieldError(message)
    return trimmed


def optional_date(value: object, *, message: str) -> datetime | None:
    """Optional ``YYYY-MM-DD`` date as a UTC-midnight instant."""
    trimmed = _trimmed_or_none(value, message)
    if trimmed is None:
        return None
    try:
        return parse_calendar_date(trimmed)
    except CalendarDateError as exc:
        raise FieldError(message) from exc


def finite_number(value: object, *, missing: str, not_finite: str) -> int | float:
    """Reject absent and non-numeric values (bools included), then NaN/inf."""
    if value is None or isinstance(value, bool) or not isinstance(value, int | float):
        raise FieldError(missing)
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints beyond the float range
        finite = False
    if not finite:
        raise FieldError(not_finite)
    return value


def bounded_step_number(
    value: object,
    minimum: float,
    maximum: float,
    step: float,
    *,
    missing: str,
    not_finite: str,
    above_max: str,
    off_grid: str,
) -> int | float:
    """Numeric value within ``[minimum, maximum]`` on a *step* grid.

    The upper bound is checked first. Values below *minimum* and values
    off the grid share *off_grid*. Grid membership scales by ``1 / step``
    and compares against the rounded result rather than using float
    modulo, so ``7.75`` passes for a step of ``0.25``.
    """
    number = finite_number(value, missing=missing, not_finite=not_finite)
    if number > maximum:
        raise FieldError(above_max)
    scaled = number * (1 / step)
    if number < minimum or round(scaled) != scaled:
        raise FieldError(off_grid)
    return number


def enum_member(value: object, allowed: type[E], *, message: str) -> E:
    """Exact, case-sensitive membership; missing, empty and unknown share *message*."""
    if not isinstance(value, str) or not value:
        raise FieldError(message)
    try:
        return allowed(value)
    except ValueError as exc:
        raise FieldError(message) from exc
