"""
Aggregation service for computing driver mileage.

This module groups cleaned journeys by driver, sums their distances, and
picks the most active driver for the day.
"""

from typing import Dict, Mapping, Optional, Sequence
import logging

import pandas as pd

from ..config import Settings, get_settings
from ..core.models import JourneyRecord

logger = logging.getLogger(__name__)


def aggregate_by_driver(journeys: Sequence[JourneyRecord]) -> Dict[str, float]:
    """
    Total distance per driver.

    Drivers appear in the order they are first seen; distances are summed
    in input order. Drivers without journeys are absent.
    """
    totals: Dict[str, float] = {}
    for journey in journeys:
        totals[journey.driver_id] = totals.get(journey.driver_id, 0.0) + journey.distance_km
    return totals


def most_active_driver(mileage: Mapping[str, float]) -> str:
    """
    Driver with the highest total mileage.

    Ties go to the lexicographically smallest driver id.

    Raises:
        ValueError: If ``mileage`` is empty
    """
    if not mileage:
        raise ValueError("most_active_driver() requires at least one driver")
    return min(mileage, key=lambda driver_id: (-mileage[driver_id], driver_id))


class AggregatorService:
    """
    Service for aggregating journey metrics by driver.

    Wraps the aggregation functions with logging and builds the
    DataFrames used by the exports.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the aggregator service.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()

    def aggregate(self, journeys: Sequence[JourneyRecord]) -> Dict[str, float]:
        """
        Aggregate mileage by driver.

        Args:
            journeys: Cleaned journeys of the batch

        Returns:
            Mapping of driver id to total kilometers
        """
        logger.info("Starting aggregation by driver")

        if not journeys:
            logger.warning("No journeys to aggregate")
            return {}

        mileage = aggregate_by_driver(journeys)
        self._log_statistics(mileage, len(journeys))
        return mileage

    def most_active(self, mileage: Mapping[str, float]) -> Optional[str]:
        """Most active driver, or None when no driver has mileage."""
        if not mileage:
            return None
        return most_active_driver(mileage)

    def mileage_frame(self, mileage: Mapping[str, float]) -> pd.DataFrame:
        """
        DataFrame of driver totals sorted by mileage (highest first).

        Args:
            mileage: Output of ``aggregate``

        Returns:
            DataFrame with ``driverId`` and ``totalMileageKm`` columns
        """
        df = pd.DataFrame(
            list(mileage.items()), columns=["driverId", "totalMileageKm"]
        )
        if df.empty:
            return df
        df["totalMileageKm"] = df["totalMileageKm"].astype(float).round(2)
        return df.sort_values(
            ["totalMileageKm", "driverId"], ascending=[False, True]
        ).reset_index(drop=True)

    def _log_statistics(self, mileage: Mapping[str, float], journey_count: int) -> None:
        """Log aggregation statistics."""
        logger.info("Statistics for driver mileage:")
        logger.info(f"- Total drivers: {len(mileage)}")
        logger.info(f"- Total journeys: {journey_count}")
        logger.info(f"- Total kilometers: {sum(mileage.values()):.2f}")
