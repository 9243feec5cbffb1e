"""
Core utility functions for data processing.

This module provides reusable utility functions for epoch/civil time
conversion, batch date extraction, and DataFrame construction.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union
from zoneinfo import ZoneInfo
import re
import logging

import pandas as pd

from .models import JourneyRecord

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_BATCH_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

ZoneLike = Union[str, ZoneInfo]


class DateTimeUtils:
    """Utility class for datetime operations."""

    @staticmethod
    def resolve_zone(zone: ZoneLike) -> ZoneInfo:
        """
        Return a ZoneInfo for an IANA zone name or pass one through.

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If the zone name is unknown
        """
        if isinstance(zone, ZoneInfo):
            return zone
        return ZoneInfo(zone)

    @staticmethod
    def from_epoch_millis(millis: int, zone: ZoneInfo) -> datetime:
        """
        Interpret epoch milliseconds as a civil date-time in a zone.

        Args:
            millis: Milliseconds since 1970-01-01T00:00:00Z
            zone: Zone the civil time is expressed in

        Returns:
            Naive datetime holding the wall-clock time in ``zone``
        """
        instant = _EPOCH + timedelta(milliseconds=millis)
        return instant.astimezone(zone).replace(tzinfo=None)

    @staticmethod
    def format_datetime(dt: datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        """
        Format datetime object to string.

        Args:
            dt: Datetime object to format
            fmt: Format string

        Returns:
            Formatted datetime string
        """
        if dt is None:
            return ""
        return dt.strftime(fmt)


def extract_batch_date(file_path: Union[str, Path], default: str) -> str:
    """
    Extract the batch date (YYYY-MM-DD) from a file name.

    Args:
        file_path: Path of the batch file; only its name is searched
        default: Date returned when the name carries none

    Returns:
        The first date found in the file name, or ``default``
    """
    match = _BATCH_DATE_PATTERN.search(Path(file_path).name)
    if match:
        return match.group(0)
    logger.warning(f"No batch date found in file name, using default date {default}")
    return default


class DataFrameUtils:
    """Utility class for DataFrame operations."""

    @staticmethod
    def journeys_to_frame(
        journeys: Sequence[JourneyRecord],
        decimals: Optional[int] = 2
    ) -> pd.DataFrame:
        """
        Build a DataFrame with one row per journey, in input order.

        Args:
            journeys: Journey records to convert
            decimals: Round float columns to this many places (None to skip)

        Returns:
            DataFrame with the columns of ``JourneyRecord.to_dict``
        """
        columns = DataFrameUtils.journey_columns()
        df = pd.DataFrame([journey.to_dict() for journey in journeys], columns=columns)
        if decimals is not None and not df.empty:
            float_cols = ["distanceKm", "durationMin", "avgSpeedKph"]
            df[float_cols] = df[float_cols].astype(float).round(decimals)
        return df

    @staticmethod
    def journey_columns() -> List[str]:
        """Column names of a journey DataFrame."""
        return [
            "journeyId", "driverId", "startTime", "endTime",
            "startLat", "startLon", "endLat", "endLon",
            "startOdometer", "endOdometer",
            "distanceKm", "durationMin", "durationMS", "avgSpeedKph",
        ]
