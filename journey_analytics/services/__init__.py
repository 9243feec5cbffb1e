"""Services module containing business logic implementations."""

from .data_loader import DataLoaderService
from .cleaner import CleanerService, clean_record, log_rejection
from .query import by_duration_range, by_average_speed_range
from .aggregator import AggregatorService, aggregate_by_driver, most_active_driver
from .pipeline import ProcessingPipeline
from .excel_formatter import ExcelFormatter, get_excel_formatter

__all__ = [
    "DataLoaderService",
    "CleanerService",
    "clean_record",
    "log_rejection",
    "by_duration_range",
    "by_average_speed_range",
    "AggregatorService",
    "aggregate_by_driver",
    "most_active_driver",
    "ProcessingPipeline",
    "ExcelFormatter",
    "get_excel_formatter",
]
