"""Tests for daily signal validation and signal list filters."""

from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from lifeplan.domain import messages
from lifeplan.domain.result import Err, Ok
from lifeplan.domain.types import SignalType
from lifeplan.domain.validators import (
    validate_date_range,
    validate_signal_date,
    validate_signal_input,
    validate_signal_type,
    validate_signal_value,
)


class TestSleepValue:
    @pytest.mark.parametrize("value", [0, 0.25, 7.5, 7.75, 14])
    def test_accepted(self, value: float) -> None:
        assert validate_signal_value(value, "SLEEP") == Ok(data=value)

    def test_upper_bound_message(self) -> None:
        assert validate_signal_value(15, "SLEEP") == Err(error=messages.SLEEP_TOO_HIGH)
        assert validate_signal_value(14.25, "SLEEP") == Err(error=messages.SLEEP_TOO_HIGH)

    @pytest.mark.parametrize("value", [7.3, -0.25, 0.1])
    def test_increment_message(self, value: float) -> None:
        assert validate_signal_value(value, "SLEEP") == Err(error=messages.SLEEP_INCREMENT)

    def test_copy(self) -> None:
        assert messages.SLEEP_TOO_HIGH == "Sleep hours can't exceed 14"


class TestWellbeingValue:
    @pytest.mark.parametrize("value", [1, 5, 10, 10.0])
    def test_accepted(self, value: float) -> None:
        assert validate_signal_value(value, SignalType.WELLBEING).ok

    @pytest.mark.parametrize("value", [0, 11, 2.5, -1])
    def test_rejected(self, value: float) -> None:
        result = validate_signal_value(value, SignalType.WELLBEING)
        assert result == Err(error=messages.WELLBEING_INVALID)


class TestValueContract:
    @pytest.mark.parametrize("value", [None, "7", True])
    def test_missing(self, value: object) -> None:
        assert validate_signal_value(value, "SLEEP") == Err(error=messages.SIGNAL_VALUE_REQUIRED)

    @pytest.mark.parametrize("value", [math.nan, math.inf])
    def test_not_finite(self, value: float) -> None:
        assert validate_signal_value(value, "SLEEP") == Err(
            error=messages.SIGNAL_VALUE_NOT_NUMBER
        )

    @pytest.mark.parametrize("signal_type", ["SLEEP", "WELLBEING"])
    def test_int_beyond_float_range(self, signal_type: str) -> None:
        assert validate_signal_value(10**400, signal_type) == Err(
            error=messages.SIGNAL_VALUE_NOT_NUMBER
        )
        assert validate_signal_value(-(10**400), signal_type) == Err(
            error=messages.SIGNAL_VALUE_NOT_NUMBER
        )

    def test_type_missing(self) -> None:
        assert validate_signal_value(7, None) == Err(error=messages.SIGNAL_VALUE_TYPE_MISSING)

    def test_type_unknown(self) -> None:
        assert validate_signal_value(7, "MOOD") == Err(error=messages.SIGNAL_VALUE_TYPE_UNKNOWN)


class TestTypeAndDate:
    def test_type(self) -> None:
        assert validate_signal_type(" SLEEP ") == Ok(data=SignalType.SLEEP)
        assert validate_signal_type("sleep") == Err(error=messages.SIGNAL_TYPE_INVALID)
        assert validate_signal_type(None) == Err(error=messages.SIGNAL_TYPE_REQUIRED)

    def test_date(self) -> None:
        assert validate_signal_date("2025-02-01") == Ok(data=datetime(2025, 2, 1, tzinfo=UTC))
        assert validate_signal_date("2025-02-29") == Err(error=messages.SIGNAL_DATE_INVALID)
        assert validate_signal_date(None) == Err(error=messages.SIGNAL_DATE_REQUIRED)


class TestSignalInput:
    def test_create(self) -> None:
        result = validate_signal_input({"type": "SLEEP", "date": "2025-01-10", "value": 7.25})
        assert isinstance(result, Ok)
        assert result.data.to_payload() == {"type": "SLEEP", "date": "2025-01-10", "value": 7.25}

    def test_oversized_value_is_an_error(self) -> None:
        raw = {"type": "WELLBEING", "date": "2025-01-06", "value": 10**400}
        assert validate_signal_input(raw) == Err(error=messages.SIGNAL_VALUE_NOT_NUMBER)

    def test_first_error_wins(self) -> None:
        result = validate_signal_input({"type": "NAP", "date": "bad", "value": 99})
        assert result == Err(error=messages.SIGNAL_TYPE_INVALID)

    def test_value_checked_against_supplied_type(self) -> None:
        result = validate_signal_input({"type": "WELLBEING", "date": "2025-01-10", "value": 7.25})
        assert result == Err(error=messages.WELLBEING_INVALID)

    def test_partial_value_uses_current_type(self) -> None:
        result = validate_signal_input({"value": 12}, partial=True, current_type="SLEEP")
        assert isinstance(result, Ok)
        assert result.data.to_payload() == {"value": 12}

        result = validate_signal_input({"value": 12}, partial=True, current_type="WELLBEING")
        assert result == Err(error=messages.WELLBEING_INVALID)

    def test_partial_value_without_any_type(self) -> None:
        result = validate_signal_input({"value": 5}, partial=True)
        assert result == Err(error=messages.SIGNAL_VALUE_TYPE_MISSING)

    def test_supplied_type_overrides_current(self) -> None:
        result = validate_signal_input(
            {"type": "SLEEP", "value": 12.5}, partial=True, current_type="WELLBEING"
        )
        assert result.ok

    def test_revalidating_payload_is_stable(self) -> None:
        first = validate_signal_input({"type": "WELLBEING", "date": " 2025-03-01 ", "value": 8})
        assert isinstance(first, Ok)
        assert validate_signal_input(first.data.to_payload()) == first


class TestDateRange:
    def test_empty_filters(self) -> None:
        result = validate_date_range({})
        assert isinstance(result, Ok)
        assert result.data.to_payload() == {}

    def test_full(self) -> None:
        result = validate_date_range({"type": "SLEEP", "from": "2025-01-01", "to": "2025-01-31"})
        assert isinstance(result, Ok)
        assert result.data.from_ == datetime(2025, 1, 1, tzinfo=UTC)
        assert result.data.to_payload() == {
            "type": "SLEEP",
            "from": "2025-01-01",
            "to": "2025-01-31",
        }

    def test_same_day(self) -> None:
        assert validate_date_range({"from": "2025-01-01", "to": "2025-01-01"}).ok

    def test_inverted(self) -> None:
        result = validate_date_range({"from": "2025-02-01", "to": "2025-01-01"})
        assert result == Err(error=messages.DATE_RANGE_INVERTED)

    def test_four_hundred_days_allowed(self) -> None:
        assert validate_date_range({"from": "2024-01-01", "to": "2025-02-04"}).ok

    def test_too_long(self) -> None:
        result = validate_date_range({"from": "2024-01-01", "to": "2025-02-05"})
        assert result == Err(error=messages.DATE_RANGE_TOO_LONG)

    def test_bad_bound(self) -> None:
        result = validate_date_range({"from": "2025-01-01", "to": "tomorrow"})
        assert result == Err(error=messages.SIGNAL_DATE_INVALID)
