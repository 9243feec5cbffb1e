"""
Domain models and data transfer objects.

This module defines the core data structures used throughout the application:
the schema map describing a delimited journey line, the validated journey
record, the rejection produced for an unusable line, and the result
container returned by the processing pipeline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Optional, List, Dict, Any, Mapping, Union


REQUIRED_FIELDS = (
    "journeyId",
    "driverId",
    "startTime",
    "endTime",
    "startLat",
    "startLon",
    "endLat",
    "endLon",
    "startOdometer",
    "endOdometer",
)


@dataclass(frozen=True)
class SchemaMap:
    """
    Mapping from logical field name to zero-based column index.

    The indices must be a permutation of ``0..field_count-1`` and every
    required field must be present. Raises ``ValueError`` otherwise.
    """

    fields: Mapping[str, int]

    def __post_init__(self):
        missing = [name for name in REQUIRED_FIELDS if name not in self.fields]
        if missing:
            raise ValueError(f"Schema is missing required fields: {', '.join(missing)}")

        indices = sorted(self.fields.values())
        if indices != list(range(len(indices))):
            raise ValueError(
                f"Schema indices must be a permutation of 0..{len(indices) - 1}, got {indices}"
            )

        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def field_count(self) -> int:
        """Expected number of tokens in a record."""
        return len(self.fields)

    def index(self, name: str) -> int:
        """Column index of a logical field."""
        return self.fields[name]


SCHEMA_V1 = SchemaMap({name: idx for idx, name in enumerate(REQUIRED_FIELDS)})


@dataclass(frozen=True)
class JourneyRecord:
    """
    A validated journey line enriched with its derived metrics.

    Times are civil date-times in the zone the batch was cleaned with.
    Coordinates are carried through as the strings found in the file.
    """

    # Identification
    journey_id: str
    driver_id: str

    # Timestamps
    start_time: datetime
    end_time: datetime

    # Locations
    start_lat: str
    start_lon: str
    end_lat: str
    end_lon: str

    # Odometer readings (km)
    start_odometer: float
    end_odometer: float

    # Derived metrics
    distance_km: float
    duration: float  # minutes
    duration_ms: int
    avg_speed: float  # kph

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary representation."""
        return {
            "journeyId": self.journey_id,
            "driverId": self.driver_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "startLat": self.start_lat,
            "startLon": self.start_lon,
            "endLat": self.end_lat,
            "endLon": self.end_lon,
            "startOdometer": self.start_odometer,
            "endOdometer": self.end_odometer,
            "distanceKm": self.distance_km,
            "durationMin": self.duration,
            "durationMS": self.duration_ms,
            "avgSpeedKph": self.avg_speed,
        }


class RejectionReason(Enum):
    """Why a raw line did not produce a journey record."""

    MALFORMED_FORMAT = "malformed-format"
    PARSE_FAILURE = "parse-failure"
    INVALID_DATA = "invalid-data"


@dataclass(frozen=True)
class Rejection:
    """A line that was skipped during cleaning, with the reason and cause."""

    reason: RejectionReason
    line: str
    cause: Optional[Exception] = field(default=None, compare=False)

    @property
    def detail(self) -> str:
        """Human-readable description of the rejection."""
        if self.reason is RejectionReason.MALFORMED_FORMAT:
            return f"Invalid format or empty fields: {self.line}"
        if self.reason is RejectionReason.INVALID_DATA:
            return f"Invalid data detected: {self.line}"
        return f"Error processing line: {self.line} ({self.cause})"


CleanResult = Union[JourneyRecord, Rejection]


@dataclass
class ProcessingResult:
    """
    Result container for the journey processing pipeline.

    Encapsulates the cleaned batch, the answers to the daily queries,
    statistics, and status information.
    """

    batch_date: Optional[str] = None
    total_lines: int = 0

    # Cleaned batch
    journeys: List[JourneyRecord] = field(default_factory=list)
    rejections: List[Rejection] = field(default_factory=list)

    # Query answers
    min_duration: float = 0.0
    duration_matches: List[JourneyRecord] = field(default_factory=list)
    speed_matches: List[JourneyRecord] = field(default_factory=list)
    mileage_by_driver: Dict[str, float] = field(default_factory=dict)
    most_active_driver: Optional[str] = None

    # Status
    success: bool = False
    message: str = ""
    processing_errors: List[str] = field(default_factory=list)

    @property
    def has_journeys(self) -> bool:
        """Check if any line survived cleaning."""
        return bool(self.journeys)

    @property
    def has_duration_matches(self) -> bool:
        """Check if the duration query matched anything."""
        return bool(self.duration_matches)

    def rejection_counts(self) -> Dict[RejectionReason, int]:
        """Number of rejected lines per reason, every reason included."""
        counts = {reason: 0 for reason in RejectionReason}
        for rejection in self.rejections:
            counts[rejection.reason] += 1
        return counts
