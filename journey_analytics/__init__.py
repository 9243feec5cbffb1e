"""
Journey Analytics Application.

Cleans daily vehicle-journey batch files, derives per-journey metrics, and
answers the daily duration, speed, and driver mileage queries.
"""

__version__ = "1.0.0"

from .config import Settings, get_settings
from .core import JourneyRecord, Rejection, RejectionReason, SchemaMap, SCHEMA_V1, ProcessingResult
from .services import ProcessingPipeline
from .reports import ConsoleReporter, ReportGenerator

__all__ = [
    "Settings",
    "get_settings",
    "JourneyRecord",
    "Rejection",
    "RejectionReason",
    "SchemaMap",
    "SCHEMA_V1",
    "ProcessingResult",
    "ProcessingPipeline",
    "ConsoleReporter",
    "ReportGenerator",
]
