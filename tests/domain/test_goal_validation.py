"""Tests for goal input validation."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from lifeplan.domain import messages
from lifeplan.domain.result import Err, Ok
from lifeplan.domain.types import GOAL_DESCRIPTION_MAX, GOAL_TITLE_MAX, GoalStatus, Horizon
from lifeplan.domain.validators import validate_goal_input

AREA_ID = "3f2504e0-4f89-41d3-9a0c-0305e82c3301"


def _valid(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {"title": "Run a half marathon", "horizon": "YEAR", "status": "active"}
    raw.update(overrides)
    return raw


class TestCreate:
    def test_learn_spanish_scenario(self) -> None:
        result = validate_goal_input(
            {"title": "  Learn Spanish  ", "horizon": "YEAR", "status": "active"}
        )
        assert isinstance(result, Ok)
        assert result.data.to_payload() == {
            "title": "Learn Spanish",
            "description": None,
            "horizon": "YEAR",
            "status": "active",
            "targetDate": None,
            "lifeAreaId": None,
        }

    def test_full_record(self) -> None:
        result = validate_goal_input(
            _valid(
                description="  Sub two hours ",
                horizon="SIX_MONTH",
                status="paused",
                targetDate="2025-09-14",
                lifeAreaId=f" {AREA_ID} ",
            )
        )
        assert isinstance(result, Ok)
        record = result.data
        assert record.description == "Sub two hours"
        assert record.horizon is Horizon.SIX_MONTH
        assert record.status is GoalStatus.PAUSED
        assert record.target_date == datetime(2025, 9, 14, tzinfo=UTC)
        assert record.life_area_id == AREA_ID

    def test_blank_optional_references_become_none(self) -> None:
        result = validate_goal_input(_valid(targetDate="  ", lifeAreaId=""))
        assert isinstance(result, Ok)
        assert result.data.target_date is None
        assert result.data.life_area_id is None

    def test_title_at_limit(self) -> None:
        assert validate_goal_input(_valid(title="g" * GOAL_TITLE_MAX)).ok

    def test_description_at_limit(self) -> None:
        assert validate_goal_input(_valid(description="d" * GOAL_DESCRIPTION_MAX)).ok


class TestCreateErrors:
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"title": None}, messages.GOAL_TITLE_EMPTY),
            ({"title": "   "}, messages.GOAL_TITLE_EMPTY),
            ({"title": "g" * (GOAL_TITLE_MAX + 1)}, messages.GOAL_TITLE_TOO_LONG),
            ({"description": "  "}, messages.DESCRIPTION_EMPTY),
            (
                {"description": "d" * (GOAL_DESCRIPTION_MAX + 1)},
                messages.DESCRIPTION_TOO_LONG,
            ),
            ({"horizon": "year"}, messages.HORIZON_INVALID),
            ({"horizon": None}, messages.HORIZON_INVALID),
            ({"status": "ACTIVE"}, messages.STATUS_INVALID),
            ({"status": "archived"}, messages.STATUS_INVALID),
            ({"targetDate": "2025-02-30"}, messages.TARGET_DATE_INVALID),
            ({"targetDate": "14/09/2025"}, messages.TARGET_DATE_INVALID),
            ({"lifeAreaId": "health"}, messages.LIFE_AREA_ID_INVALID),
        ],
    )
    def test_field_errors(self, overrides: dict[str, object], message: str) -> None:
        assert validate_goal_input(_valid(**overrides)) == Err(error=message)

    def test_first_failing_field_wins(self) -> None:
        result = validate_goal_input({"title": "", "horizon": "NOPE", "status": "nope"})
        assert result == Err(error=messages.GOAL_TITLE_EMPTY)

    def test_missing_horizon_in_create_mode(self) -> None:
        result = validate_goal_input({"title": "Read more", "status": "active"})
        assert result == Err(error=messages.HORIZON_INVALID)

    def test_enum_copy_lists_members(self) -> None:
        assert messages.HORIZON_INVALID == "Horizon must be one of: YEAR, SIX_MONTH, MONTH, WEEK"
        assert messages.STATUS_INVALID == "Status must be one of: active, paused, done"


class TestPartial:
    def test_only_supplied_fields_present(self) -> None:
        result = validate_goal_input({"status": "done"}, partial=True)
        assert isinstance(result, Ok)
        assert result.data.model_fields_set == {"status"}
        assert result.data.to_payload() == {"status": "done"}

    def test_empty_update(self) -> None:
        result = validate_goal_input({}, partial=True)
        assert isinstance(result, Ok)
        assert result.data.to_payload() == {}

    def test_explicit_null_clears_optional_field(self) -> None:
        result = validate_goal_input({"lifeAreaId": None, "targetDate": None}, partial=True)
        assert isinstance(result, Ok)
        assert result.data.to_payload() == {"lifeAreaId": None, "targetDate": None}

    def test_supplied_null_title_still_rejected(self) -> None:
        assert validate_goal_input({"title": None}, partial=True) == Err(
            error=messages.GOAL_TITLE_EMPTY
        )

    def test_unsupplied_fields_not_checked(self) -> None:
        assert validate_goal_input({"title": "Ok"}, partial=True).ok


class TestIdempotence:
    @pytest.mark.parametrize(
        "raw",
        [
            {"title": "  Learn Spanish  ", "horizon": "YEAR", "status": "active"},
            {
                "title": "Ship v2",
                "description": " Launch ",
                "horizon": "MONTH",
                "status": "paused",
                "targetDate": "2025-05-31",
                "lifeAreaId": AREA_ID,
            },
        ],
    )
    def test_revalidating_payload_is_stable(self, raw: dict[str, object]) -> None:
        first = validate_goal_input(raw)
        assert isinstance(first, Ok)
        second = validate_goal_input(first.data.to_payload())
        assert second == first
