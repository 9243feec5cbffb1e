"""
Console rendering of the daily journey queries.

This module owns the user-facing wording, including the messages shown
when a query has nothing to report.
"""

import sys
from typing import Mapping, Optional, Sequence, TextIO

from ..core.models import JourneyRecord
from ..services.query import by_duration_range

NO_DURATION_MATCHES = "No journeys matching the duration criteria."
NO_JOURNEYS = "No journeys found."


class ConsoleReporter:
    """Prints journey query answers to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self._stream)

    def print_journey(self, journey: JourneyRecord) -> None:
        self._print(
            f"journeyId: {journey.journey_id} {journey.driver_id} "
            f"distance {journey.distance_km} durationMS  {journey.duration_ms} "
            f"avgSpeed in kph was {journey.avg_speed}"
        )

    def print_journey_list(self, journeys: Sequence[JourneyRecord]) -> None:
        for journey in journeys:
            self.print_journey(journey)

    def journeys_at_least_duration(
        self,
        journeys: Sequence[JourneyRecord],
        min_duration: float
    ) -> Sequence[JourneyRecord]:
        """Query and print the journeys lasting at least ``min_duration`` minutes."""
        matches = by_duration_range(journeys, min_duration)
        self.print_duration_matches(matches, min_duration)
        return matches

    def print_duration_matches(
        self,
        matches: Sequence[JourneyRecord],
        min_duration: float
    ) -> None:
        self._print(f"Journeys of {min_duration} minutes or more:")
        if matches:
            self.print_journey_list(matches)
        else:
            self._print(NO_DURATION_MATCHES)

    def print_speed_matches(self, matches: Sequence[JourneyRecord]) -> None:
        self._print("\nAverage speed per journey in kph:")
        self.print_journey_list(matches)

    def print_mileage(self, mileage: Mapping[str, float]) -> None:
        self._print("\nTotal mileage by driver for the whole day:")
        for driver_id, total in mileage.items():
            self._print(f"{driver_id} drove {total} kilometers")

    def print_most_active(self, driver_id: Optional[str]) -> None:
        self._print("\nMost active driver - the driver who has driven the most kilometers:")
        if driver_id is not None:
            self._print(f"Most active driver is {driver_id}")
        else:
            self._print(NO_JOURNEYS)

    def render(
        self,
        duration_matches: Sequence[JourneyRecord],
        min_duration: float,
        speed_matches: Sequence[JourneyRecord],
        mileage: Mapping[str, float],
        most_active: Optional[str]
    ) -> None:
        """Print the four daily query sections."""
        self.print_duration_matches(duration_matches, min_duration)
        self.print_speed_matches(speed_matches)
        self.print_mileage(mileage)
        self.print_most_active(most_active)
