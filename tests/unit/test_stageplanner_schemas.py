"""
Unit tests for stage planner request schemas.

Tests date normalization to naive UTC and the null handling of partial
updates.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from planner_api.schemas.stageplanner import EventCreate, EventUpdate


class TestEventDates:
    def test_naive_dates_unchanged(self):
        event = EventCreate(title="Show", start_date="2030-01-01T20:00:00", end_date="2030-01-01T23:00:00")

        assert event.start_date == datetime(2030, 1, 1, 20, 0)
        assert event.start_date.tzinfo is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2030-01-01T23:00:00Z", datetime(2030, 1, 1, 23, 0)),
            ("2030-01-01T23:00:00+02:00", datetime(2030, 1, 1, 21, 0)),
            ("2030-01-01T23:00:00-05:00", datetime(2030, 1, 2, 4, 0)),
        ],
    )
    def test_offsets_converted_to_naive_utc(self, value, expected):
        event = EventCreate(title="Show", start_date="2030-01-01T00:00:00", end_date=value)

        assert event.end_date == expected
        assert event.end_date.tzinfo is None

    def test_update_dates_normalized(self):
        update = EventUpdate(start_date="2030-01-01T20:00:00Z")
        assert update.start_date == datetime(2030, 1, 1, 20, 0)


class TestEventUpdate:
    def test_omitted_fields_not_set(self):
        update = EventUpdate(location="Tent B")
        assert update.model_dump(exclude_unset=True) == {"location": "Tent B"}

    @pytest.mark.parametrize("field", ["title", "start_date", "end_date"])
    def test_null_required_field_rejected(self, field):
        with pytest.raises(ValidationError) as exc_info:
            EventUpdate(**{field: None})

        assert exc_info.value.errors()[0]["loc"] == (field,)

    @pytest.mark.parametrize("field", ["description", "location"])
    def test_optional_field_can_be_cleared(self, field):
        update = EventUpdate(**{field: None})
        assert update.model_dump(exclude_unset=True) == {field: None}
