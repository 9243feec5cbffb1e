"""
Query functions over a cleaned batch of journeys.

Both filters keep the input order, use inclusive bounds and never fail:
an empty result is a valid answer.
"""

from typing import List, Sequence

import numpy as np

from ..core.models import JourneyRecord


def by_duration_range(
    journeys: Sequence[JourneyRecord],
    min_duration: float = 0.0,
    max_duration: float = np.inf
) -> List[JourneyRecord]:
    """Journeys whose duration in minutes lies in [min_duration, max_duration]."""
    return [
        journey for journey in journeys
        if min_duration <= journey.duration <= max_duration
    ]


def by_average_speed_range(
    journeys: Sequence[JourneyRecord],
    min_speed: float = 0.0,
    max_speed: float = np.inf
) -> List[JourneyRecord]:
    """Journeys whose average speed in kph lies in [min_speed, max_speed]."""
    return [
        journey for journey in journeys
        if min_speed <= journey.avg_speed <= max_speed
    ]
