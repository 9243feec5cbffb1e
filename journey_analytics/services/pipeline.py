"""
Processing pipeline that orchestrates all services.

This module provides the main processing pipeline that coordinates
line loading, cleaning, the daily queries, aggregation, and export.
"""

from pathlib import Path
from typing import Optional
import logging

from ..config import Settings, get_settings
from ..core.models import ProcessingResult
from ..core.utils import DataFrameUtils
from .data_loader import DataLoaderService
from .cleaner import CleanerService, DiagnosticSink
from .aggregator import AggregatorService
from .query import by_duration_range, by_average_speed_range
from .excel_formatter import get_excel_formatter

logger = logging.getLogger(__name__)


class ProcessingPipeline:
    """
    Main processing pipeline for journey analysis.

    Orchestrates all services to process a daily batch file from raw
    lines to cleaned journeys, query answers, and driver mileage.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sink: Optional[DiagnosticSink] = None
    ):
        """
        Initialize the processing pipeline.

        Args:
            settings: Application settings. If None, uses default settings.
            sink: Diagnostic sink for rejected lines. Logs them if None.
        """
        self._settings = settings or get_settings()
        self._sink = sink

        # Initialize services
        self._loader = DataLoaderService(self._settings)
        self._cleaner = CleanerService(self._settings)
        self._aggregator = AggregatorService(self._settings)
        self._excel_formatter = get_excel_formatter()

    def run(
        self,
        input_path: Optional[Path] = None,
        batch_date: Optional[str] = None,
        export: bool = True
    ) -> ProcessingResult:
        """
        Execute the full processing pipeline.

        Args:
            input_path: Optional path to input file. Uses default if not provided.
            batch_date: Optional batch date. Taken from the file name if not provided.
            export: Whether to write the Excel workbook

        Returns:
            ProcessingResult containing all outputs and statistics
        """
        result = ProcessingResult()
        path = Path(input_path) if input_path else self._settings.input_path
        queries = self._settings.queries

        try:
            # Step 1: Load data
            logger.info("=" * 60)
            logger.info("STEP 1: Loading data")
            logger.info("=" * 60)

            result.batch_date = self._loader.batch_date(path, batch_date)
            lines = self._loader.load(path)
            result.total_lines = len(lines)

            # Step 2: Clean and derive metrics
            logger.info("=" * 60)
            logger.info("STEP 2: Cleaning journeys")
            logger.info("=" * 60)

            result.journeys, result.rejections = self._cleaner.clean_lines(
                lines, sink=self._sink
            )

            # Step 3: Queries
            logger.info("=" * 60)
            logger.info("STEP 3: Querying journeys")
            logger.info("=" * 60)

            result.min_duration = queries.min_duration
            result.duration_matches = by_duration_range(
                result.journeys, queries.min_duration
            )
            result.speed_matches = by_average_speed_range(
                result.journeys, queries.min_avg_speed, queries.max_avg_speed
            )
            logger.info(
                f"Journeys of {queries.min_duration} minutes or more: "
                f"{len(result.duration_matches)}"
            )
            logger.info(
                f"Journeys between {queries.min_avg_speed} and {queries.max_avg_speed} kph: "
                f"{len(result.speed_matches)}"
            )

            # Step 4: Aggregate by driver
            logger.info("=" * 60)
            logger.info("STEP 4: Aggregating mileage by driver")
            logger.info("=" * 60)

            result.mileage_by_driver = self._aggregator.aggregate(result.journeys)
            result.most_active_driver = self._aggregator.most_active(result.mileage_by_driver)

            # Step 5: Export
            if export:
                logger.info("=" * 60)
                logger.info("STEP 5: Exporting results")
                logger.info("=" * 60)
                self._export(result)

            result.success = True
            result.message = "Processing completed successfully"

        except FileNotFoundError as e:
            result.success = False
            result.message = f"File not found: {e}"
            result.processing_errors.append(str(e))
            logger.error(result.message)

        except Exception as e:
            result.success = False
            result.message = f"Processing failed: {e}"
            result.processing_errors.append(str(e))
            logger.exception("Pipeline execution failed")

        return result

    def _export(self, result: ProcessingResult) -> None:
        """Save the batch results as a formatted workbook."""
        self._settings.paths.ensure_output_dir()
        path = self._settings.workbook_path

        sheets = {
            "Journeys": DataFrameUtils.journeys_to_frame(result.journeys),
            "Long Journeys": DataFrameUtils.journeys_to_frame(result.duration_matches),
            "Average Speed": DataFrameUtils.journeys_to_frame(result.speed_matches),
            "Driver Mileage": self._aggregator.mileage_frame(result.mileage_by_driver),
        }
        highlight = (
            {"Driver Mileage": {"driverId": result.most_active_driver}}
            if result.most_active_driver else None
        )

        if self._excel_formatter.export(sheets, path, highlight=highlight):
            logger.info(f"Results saved to: {path}")
        else:
            result.processing_errors.append(f"Failed to save workbook: {path}")
