"""Core module containing domain models and utilities."""

from .models import (
    SchemaMap,
    SCHEMA_V1,
    JourneyRecord,
    Rejection,
    RejectionReason,
    CleanResult,
    ProcessingResult,
)
from .utils import DateTimeUtils, DataFrameUtils, extract_batch_date

__all__ = [
    "SchemaMap",
    "SCHEMA_V1",
    "JourneyRecord",
    "Rejection",
    "RejectionReason",
    "CleanResult",
    "ProcessingResult",
    "DateTimeUtils",
    "DataFrameUtils",
    "extract_batch_date",
]
