"""Calendar arithmetic: strict ISO dates, week starts, and Monday checks.

Instants are timezone-aware ``datetime`` objects in UTC. A calendar date
such as ``"2025-01-06"`` always parses to UTC midnight of that day; which
*weekday* an instant falls on is observed in a reference IANA timezone
(``zoneinfo``, never fixed offsets), so week boundaries stay correct
across DST transitions.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from lifeplan.domain.types import DEFAULT_RANGE_DAYS

DEFAULT_TIMEZONE = "America/Denver"

_CALENDAR_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class CalendarDateError(ValueError):
    """Text is not a real ``YYYY-MM-DD`` calendar date.

    Malformed shapes and impossible dates (``2025-02-30``) are the same
    error; callers cannot tell them apart.
    """


class NotMondayError(ValueError):
    """A well-formed date that does not fall on a Monday."""


def _as_utc(instant: datetime) -> datetime:
    """Read naive datetimes as UTC; convert aware ones to UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def format_calendar_date(instant: datetime) -> str:
    """``YYYY-MM-DD`` of *instant* in UTC."""
    return _as_utc(instant).date().isoformat()


def local_date(instant: datetime, timezone: str = DEFAULT_TIMEZONE) -> date:
    """Calendar date *instant* falls on in *timezone*."""
    return _as_utc(instant).astimezone(ZoneInfo(timezone)).date()


def week_start_for(instant: datetime, timezone: str = DEFAULT_TIMEZONE) -> datetime:
    """Return local midnight of the Monday on or before *instant*'s local day.

    The result is a UTC instant. It is independent of the time of day and
    of any DST shift inside the week, and applying it to its own output
    returns the same instant.
    """
    zone = ZoneInfo(timezone)
    local_day = _as_utc(instant).astimezone(zone).date()
    monday = local_day - timedelta(days=local_day.weekday())
    return datetime.combine(monday, time.min, tzinfo=zone).astimezone(UTC)


def parse_calendar_date(text: object) -> datetime:
    """Parse ``YYYY-MM-DD`` (surrounding whitespace allowed) to UTC midnight.

    Raises:
        CalendarDateError: For any other shape, or a date that does not
            exist (the re-serialized value must equal the input).
    """
    if not isinstance(text, str):
        raise CalendarDateError(f"Not a calendar date: {text!r}")
    trimmed = text.strip()
    if _CALENDAR_DATE.fullmatch(trimmed) is None:
        raise CalendarDateError(f"Not a calendar date: {trimmed!r}")

    year, month, day = (int(part) for part in trimmed.split("-"))
    try:
        parsed = datetime(year, month, day, tzinfo=UTC)
    except ValueError as exc:
        raise CalendarDateError(f"Impossible calendar date: {trimmed!r}") from exc

    if format_calendar_date(parsed) != trimmed:
        raise CalendarDateError(f"Impossible calendar date: {trimmed!r}")
    return parsed


def require_monday(instant: datetime, timezone: str = DEFAULT_TIMEZONE) -> None:
    """Raise :class:`NotMondayError` unless *instant* is a Monday in *timezone*."""
    if local_date(instant, timezone).weekday() != 0:
        raise NotMondayError(f"{format_calendar_date(instant)} is not a Monday in {timezone}")


def default_date_range(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Last 30 days inclusive: start of the day 29 days ago to end of today (UTC)."""
    today = _as_utc(now or datetime.now(UTC)).date()
    start = datetime.combine(today - timedelta(days=DEFAULT_RANGE_DAYS - 1), time.min, tzinfo=UTC)
    end = datetime.combine(today, time.max, tzinfo=UTC)
    return start, end
