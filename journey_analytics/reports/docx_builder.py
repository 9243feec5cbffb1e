"""
DOCX document builder for the daily journey report.

Wraps python-docx with the blocks the journey report is made of: the
batch header, numbered sections, the data-quality table, journey tables
and the driver mileage ranking.
"""

from typing import List, Mapping, Optional, Sequence, Tuple
from docx import Document
from docx.shared import Inches
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.enum.table import WD_TABLE_ALIGNMENT
import logging

from ..core.models import JourneyRecord, RejectionReason
from ..core.utils import DateTimeUtils

logger = logging.getLogger(__name__)

TABLE_STYLE = "Light Grid Accent 1"

JOURNEY_HEADERS = ["Journey", "Driver", "Start", "Duration (min)", "Distance (km)", "Speed (kph)"]

REASON_LABELS = {
    RejectionReason.MALFORMED_FORMAT: "Malformed lines (wrong field count)",
    RejectionReason.PARSE_FAILURE: "Unparseable fields",
    RejectionReason.INVALID_DATA: "Invalid data (time or odometer out of order)",
}


class DocxBuilder:
    """
    Fluent builder for the journey report document.

    Every ``add_*`` method returns the builder so calls can be chained.
    """

    def __init__(self):
        self._doc = Document()
        self._configure_page()

    def _configure_page(self) -> None:
        """A4 portrait with 30mm top, bottom and left margins."""
        section = self._doc.sections[0]
        section.page_height = Inches(11.69)
        section.page_width = Inches(8.27)
        section.left_margin = Inches(1.18)
        section.right_margin = Inches(0.79)
        section.top_margin = Inches(1.18)
        section.bottom_margin = Inches(1.18)

    def add_header(self, title: str, batch_date: Optional[str]) -> "DocxBuilder":
        """Centered title followed by the right-aligned batch date."""
        heading = self._doc.add_heading(title, 0)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

        para = self._doc.add_paragraph()
        para.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        para.add_run(f"Batch date: {batch_date or 'unknown'}").bold = True

        self._doc.add_paragraph()
        return self

    def add_section(self, number: int, title: str) -> "DocxBuilder":
        self._doc.add_heading(f"{number}. {title}", level=1)
        return self

    def add_note(self, text: str, label: Optional[str] = None) -> "DocxBuilder":
        """Plain paragraph, optionally starting with a bold label."""
        para = self._doc.add_paragraph()
        if label:
            para.add_run(label).bold = True
        para.add_run(text)
        return self

    def add_quality_table(
        self,
        total_lines: int,
        accepted: int,
        rejection_counts: Mapping[RejectionReason, int]
    ) -> "DocxBuilder":
        """
        Summary sentence and one row per cleaning outcome.

        Args:
            total_lines: Lines read from the batch file
            accepted: Journeys that survived cleaning
            rejection_counts: Rejected lines per reason
        """
        rejected = sum(rejection_counts.values())
        self.add_note(
            f"{total_lines} lines read, {accepted} journeys accepted, {rejected} lines rejected."
        )

        rows = [["Accepted journeys", str(accepted)]]
        rows.extend(
            [REASON_LABELS[reason], str(count)] for reason, count in rejection_counts.items()
        )
        return self._add_table(["Outcome", "Lines"], rows)

    def add_journey_table(self, journeys: Sequence[JourneyRecord]) -> "DocxBuilder":
        """One row per journey, in the order given."""
        rows = [
            [
                journey.journey_id,
                journey.driver_id,
                DateTimeUtils.format_datetime(journey.start_time),
                f"{journey.duration:.2f}",
                f"{journey.distance_km:.2f}",
                f"{journey.avg_speed:.2f}",
            ]
            for journey in journeys
        ]
        return self._add_table(JOURNEY_HEADERS, rows)

    def add_mileage_ranking(
        self,
        ranking: Sequence[Tuple[str, float]],
        most_active: Optional[str]
    ) -> "DocxBuilder":
        """
        Ranked driver mileage table followed by the most active driver.

        Args:
            ranking: (driver id, total km) pairs, highest mileage first
            most_active: Driver id to name below the table
        """
        rows = [
            [str(position), driver_id, f"{total:.2f}"]
            for position, (driver_id, total) in enumerate(ranking, 1)
        ]
        self._add_table(["Position", "Driver", "Distance (km)"], rows)
        if most_active:
            self.add_note(most_active, label="Most active driver: ")
        return self

    def _add_table(self, headers: List[str], rows: List[List[str]]) -> "DocxBuilder":
        table = self._doc.add_table(rows=1, cols=len(headers))
        table.style = TABLE_STYLE
        table.alignment = WD_TABLE_ALIGNMENT.CENTER

        for cell, header in zip(table.rows[0].cells, headers):
            cell.text = header

        for row_data in rows:
            for cell, value in zip(table.add_row().cells, row_data):
                cell.text = value

        self._doc.add_paragraph()
        return self

    def save(self, path: str) -> None:
        self._doc.save(path)
        logger.info(f"Document saved to: {path}")
