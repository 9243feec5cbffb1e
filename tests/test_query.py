"""
Test suite for the journey query filters
File: tests/test_query.py
"""

from journey_analytics.core.models import SCHEMA_V1
from journey_analytics.services.cleaner import clean_record
from journey_analytics.services.query import by_duration_range, by_average_speed_range


def make_journey(journey_id, driver_id, minutes, distance):
    """Build a cleaned journey lasting ``minutes`` and covering ``distance`` km."""
    line = f"{journey_id},{driver_id},0,{int(minutes * 60000)},0,0,0,0,1000.0,{1000.0 + distance}"
    return clean_record(line, SCHEMA_V1, "UTC")


class TestDurationRange:
    """Test suite for by_duration_range."""

    def setup_method(self):
        """Setup test fixtures."""
        self.journeys = [
            make_journey("J1", "D1", 120, 100),   # 50 kph
            make_journey("J2", "D2", 30, 10),     # 20 kph
            make_journey("J3", "D1", 90, 150),    # 100 kph
            make_journey("J4", "D3", 89.5, 5),
        ]

    def test_default_bounds_return_everything_in_order(self):
        assert by_duration_range(self.journeys) == self.journeys

    def test_minimum_is_inclusive(self):
        matches = by_duration_range(self.journeys, 90.0)

        assert [j.journey_id for j in matches] == ["J1", "J3"]

    def test_maximum_is_inclusive(self):
        matches = by_duration_range(self.journeys, 30.0, 90.0)

        assert [j.journey_id for j in matches] == ["J2", "J3", "J4"]

    def test_idempotent(self):
        once = by_duration_range(self.journeys, 60.0, 150.0)

        assert by_duration_range(once, 60.0, 150.0) == once

    def test_empty_result_is_valid(self):
        assert by_duration_range(self.journeys, 500.0) == []
        assert by_duration_range(self.journeys, 100.0, 10.0) == []
        assert by_duration_range([], 0.0) == []

    def test_input_is_not_modified(self):
        original = list(self.journeys)
        by_duration_range(self.journeys, 90.0)

        assert self.journeys == original


class TestAverageSpeedRange:
    """Test suite for by_average_speed_range."""

    def setup_method(self):
        """Setup test fixtures."""
        self.journeys = [
            make_journey("J1", "D1", 120, 100),   # 50 kph
            make_journey("J2", "D2", 30, 10),     # 20 kph
            make_journey("J3", "D1", 90, 150),    # 100 kph
        ]

    def test_default_bounds_return_everything(self):
        assert by_average_speed_range(self.journeys) == self.journeys

    def test_inclusive_bounds(self):
        matches = by_average_speed_range(self.journeys, 20.0, 50.0)

        assert [j.journey_id for j in matches] == ["J1", "J2"]

    def test_idempotent(self):
        once = by_average_speed_range(self.journeys, 40.0)

        assert [j.journey_id for j in once] == ["J1", "J3"]
        assert by_average_speed_range(once, 40.0) == once
