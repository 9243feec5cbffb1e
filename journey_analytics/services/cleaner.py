"""
Cleaner service for validating journey lines and computing their metrics.

This module contains the record cleaning logic: it turns one raw delimited
line into a validated, metric-enriched journey record, or a rejection that
says why the line was skipped. Cleaning itself never logs or raises for bad
data; reporting rejections is left to a diagnostic sink supplied by the
caller.
"""

from datetime import timedelta
from typing import Callable, Iterable, List, Optional, Tuple
import logging
import math
import re

from ..config import Settings, get_settings
from ..core.models import (
    CleanResult,
    JourneyRecord,
    Rejection,
    RejectionReason,
    SchemaMap,
)
from ..core.utils import DateTimeUtils, ZoneLike

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")
_ONE_MS = timedelta(milliseconds=1)

DiagnosticSink = Callable[[Rejection], None]


def _parse_epoch_millis(token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"invalid epoch milliseconds: {token!r}")
    return int(token)


def _parse_odometer(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"non-finite odometer reading: {token!r}")
    return value


def clean_record(line: str, schema: SchemaMap, zone: ZoneLike, delimiter: str = ",") -> CleanResult:
    """
    Clean one raw journey line.

    Args:
        line: Raw delimited line, possibly malformed
        schema: Field-to-column mapping of the line
        zone: Zone used to interpret both epoch-millisecond timestamps
        delimiter: Field separator

    Returns:
        A JourneyRecord, or a Rejection tagged malformed-format,
        parse-failure or invalid-data
    """
    tz = DateTimeUtils.resolve_zone(zone)

    tokens = [token.strip() for token in line.split(delimiter)]
    if len(tokens) != schema.field_count:
        return Rejection(RejectionReason.MALFORMED_FORMAT, line)

    def token(name: str) -> str:
        return tokens[schema.index(name)]

    try:
        start_ms = _parse_epoch_millis(token("startTime"))
        end_ms = _parse_epoch_millis(token("endTime"))
        start_time = DateTimeUtils.from_epoch_millis(start_ms, tz)
        end_time = DateTimeUtils.from_epoch_millis(end_ms, tz)
        start_odometer = _parse_odometer(token("startOdometer"))
        end_odometer = _parse_odometer(token("endOdometer"))
    except (ValueError, OverflowError) as e:
        return Rejection(RejectionReason.PARSE_FAILURE, line, e)

    if end_time <= start_time or end_odometer <= start_odometer:
        return Rejection(RejectionReason.INVALID_DATA, line)

    # Wall-clock difference in the batch zone, whole milliseconds
    duration_ms = (end_time - start_time) // _ONE_MS
    duration = duration_ms / 60000.0
    distance_km = end_odometer - start_odometer
    avg_speed = distance_km / (duration / 60.0) if duration != 0 else 0.0

    return JourneyRecord(
        journey_id=token("journeyId"),
        driver_id=token("driverId"),
        start_time=start_time,
        end_time=end_time,
        start_lat=token("startLat"),
        start_lon=token("startLon"),
        end_lat=token("endLat"),
        end_lon=token("endLon"),
        start_odometer=start_odometer,
        end_odometer=end_odometer,
        distance_km=distance_km,
        duration=duration,
        duration_ms=duration_ms,
        avg_speed=avg_speed,
    )


def log_rejection(rejection: Rejection) -> None:
    """Default diagnostic sink: log the rejection with the stdlib logger."""
    if rejection.reason is RejectionReason.PARSE_FAILURE:
        logger.error(rejection.detail, exc_info=rejection.cause)
    else:
        logger.warning(rejection.detail)


class CleanerService:
    """
    Service for cleaning a batch of raw journey lines.

    Applies ``clean_record`` to every line in order, keeps the valid
    records and forwards every rejection to a diagnostic sink.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the cleaner service.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()

    def clean_lines(
        self,
        lines: Iterable[str],
        zone: Optional[ZoneLike] = None,
        sink: Optional[DiagnosticSink] = None
    ) -> Tuple[List[JourneyRecord], List[Rejection]]:
        """
        Clean a sequence of raw lines.

        Args:
            lines: Raw lines in file order
            zone: Time zone override. Uses the configured zone if None.
            sink: Callable receiving each rejection. Logs them if None.

        Returns:
            Tuple of (journeys, rejections), both in input order
        """
        tz = DateTimeUtils.resolve_zone(zone or self._settings.time.timezone)
        schema = self._settings.schema
        delimiter = self._settings.files.delimiter
        sink = sink or log_rejection

        journeys: List[JourneyRecord] = []
        rejections: List[Rejection] = []

        for line in lines:
            result = clean_record(line, schema, tz, delimiter)
            if isinstance(result, Rejection):
                rejections.append(result)
                sink(result)
            else:
                journeys.append(result)

        logger.info(f"Cleaned {len(journeys)} journeys, rejected {len(rejections)} lines")

        return journeys, rejections
