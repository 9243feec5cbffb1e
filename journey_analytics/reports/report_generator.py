"""
Report generator for creating the daily journey report.

This module generates a Word document summarizing one batch: how many
lines were accepted or rejected, the long journeys of the day, and the
driver mileage ranking with the most active driver.
"""

from typing import Optional
from pathlib import Path
import logging

from ..config import Settings, get_settings
from ..core.models import ProcessingResult
from ..services.aggregator import AggregatorService
from .docx_builder import DocxBuilder

logger = logging.getLogger(__name__)


class ReportGenerator:
    """
    Generator for the daily journey report.

    Creates a Word document from a processing result, including cleaning
    statistics, the duration query, and the driver mileage ranking.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the report generator.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()
        self._aggregator = AggregatorService(self._settings)

    def generate(
        self,
        result: ProcessingResult,
        output_path: Optional[Path] = None
    ) -> Optional[Path]:
        """
        Generate the report for a processed batch.

        Args:
            result: Processing result of the batch
            output_path: Optional custom output path

        Returns:
            Path to generated report, or None if there is nothing to report
        """
        if not result.success:
            logger.warning("Batch processing failed, skipping report generation")
            return None

        if output_path is None:
            self._settings.paths.ensure_output_dir()
            output = self._settings.report_path
        else:
            output = Path(output_path)

        logger.info("Generating journey report")

        builder = DocxBuilder().add_header("DAILY JOURNEY REPORT", result.batch_date)

        self._add_cleaning_summary(builder, result)
        self._add_duration_section(builder, result)
        self._add_mileage_section(builder, result)

        builder.save(str(output))

        return output

    def _add_cleaning_summary(self, builder: DocxBuilder, result: ProcessingResult) -> None:
        builder.add_section(1, "DATA QUALITY")
        builder.add_quality_table(
            result.total_lines, len(result.journeys), result.rejection_counts()
        )

    def _add_duration_section(self, builder: DocxBuilder, result: ProcessingResult) -> None:
        builder.add_section(2, f"JOURNEYS OF {result.min_duration} MINUTES OR MORE")

        if not result.has_duration_matches:
            builder.add_note("No journeys matching the duration criteria.")
            return

        builder.add_journey_table(result.duration_matches)

    def _add_mileage_section(self, builder: DocxBuilder, result: ProcessingResult) -> None:
        builder.add_section(3, "MILEAGE BY DRIVER")

        if not result.mileage_by_driver:
            builder.add_note("No journeys found.")
            return

        df = self._aggregator.mileage_frame(result.mileage_by_driver)
        builder.add_mileage_ranking(
            list(zip(df["driverId"], df["totalMileageKm"])),
            result.most_active_driver
        )
