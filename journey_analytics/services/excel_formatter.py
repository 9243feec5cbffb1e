"""
Excel formatting service for professional-looking spreadsheets.

This module provides utilities to export DataFrames to Excel workbooks
with consistent styling, colors, and formatting.
"""

from pathlib import Path
from typing import Dict, Optional
import logging

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

logger = logging.getLogger(__name__)


class ExcelTheme:
    """Color theme for Excel formatting."""

    # Header colors
    HEADER_BG = "2F5496"  # Dark blue
    HEADER_FG = "FFFFFF"  # White text

    # Alternating row colors
    ROW_EVEN = "D6E3F8"  # Light blue
    ROW_ODD = "FFFFFF"   # White

    # Highlighted rows (most active driver)
    HIGHLIGHT_BG = "FFF2CC"  # Light yellow
    HIGHLIGHT_FG = "000000"  # Black text

    # Border color
    BORDER_COLOR = "B4C6E7"  # Light blue border


class ExcelStyles:
    """Pre-defined styles for Excel formatting."""

    @staticmethod
    def get_header_font() -> Font:
        """Bold white font for headers."""
        return Font(bold=True, color=ExcelTheme.HEADER_FG, size=11)

    @staticmethod
    def get_header_fill() -> PatternFill:
        """Dark blue background for headers."""
        return PatternFill(
            start_color=ExcelTheme.HEADER_BG,
            end_color=ExcelTheme.HEADER_BG,
            fill_type="solid"
        )

    @staticmethod
    def get_header_alignment() -> Alignment:
        """Center alignment for headers."""
        return Alignment(horizontal="center", vertical="center", wrap_text=True)

    @staticmethod
    def get_data_alignment() -> Alignment:
        """Default alignment for data cells."""
        return Alignment(horizontal="center", vertical="center")

    @staticmethod
    def get_row_fill(even: bool) -> PatternFill:
        """Zebra fill for data rows."""
        color = ExcelTheme.ROW_EVEN if even else ExcelTheme.ROW_ODD
        return PatternFill(start_color=color, end_color=color, fill_type="solid")

    @staticmethod
    def get_highlight_fill() -> PatternFill:
        """Yellow background for highlighted rows."""
        return PatternFill(
            start_color=ExcelTheme.HIGHLIGHT_BG,
            end_color=ExcelTheme.HIGHLIGHT_BG,
            fill_type="solid"
        )

    @staticmethod
    def get_highlight_font() -> Font:
        """Bold font for highlighted rows."""
        return Font(bold=True, color=ExcelTheme.HIGHLIGHT_FG, size=11)

    @staticmethod
    def get_thin_border() -> Border:
        """Thin border for cells."""
        side = Side(style="thin", color=ExcelTheme.BORDER_COLOR)
        return Border(left=side, right=side, top=side, bottom=side)

    @staticmethod
    def get_number_format() -> str:
        """Number format for decimal values."""
        return "#,##0.00"

    @staticmethod
    def get_integer_format() -> str:
        """Number format for integer values."""
        return "#,##0"

    @staticmethod
    def get_datetime_format() -> str:
        """Number format for civil date-times."""
        return "yyyy-mm-dd hh:mm:ss"


class ExcelFormatter:
    """
    Service for exporting DataFrames to formatted Excel workbooks.

    Features:
    - Styled headers with colors
    - Alternating row colors (zebra striping)
    - Auto-sized columns
    - Highlighted rows matched by a key column value
    - Proper number formatting
    """

    def __init__(self):
        """Initialize the Excel formatter."""
        self._styles = ExcelStyles()

    def export(
        self,
        sheets: Dict[str, pd.DataFrame],
        path: Path,
        highlight: Optional[Dict[str, Dict[str, str]]] = None,
        freeze_header: bool = True
    ) -> bool:
        """
        Export DataFrames to a formatted Excel workbook, one sheet each.

        Args:
            sheets: Mapping of sheet name to DataFrame, in sheet order
            path: Output file path
            highlight: Optional mapping of sheet name to a mapping of column
                name to the value whose rows should be highlighted on that sheet
            freeze_header: Whether to freeze the header row

        Returns:
            True if export was successful, False otherwise
        """
        try:
            logger.info(f"Exporting formatted Excel to: {path}")
            wb = Workbook()
            wb.remove(wb.active)

            for sheet_name, df in sheets.items():
                ws = wb.create_sheet(title=sheet_name[:31])

                self._write_data(ws, df)
                self._format_header(ws, len(df.columns))
                self._format_data_rows(ws, df, (highlight or {}).get(sheet_name, {}))
                self._auto_size_columns(ws, df)

                if freeze_header:
                    ws.freeze_panes = "A2"

            wb.save(path)
            logger.info(f"Excel file saved successfully: {path}")
            return True
        except Exception as e:
            logger.error(f"Failed to export Excel file: {e}")
            return False

    def _write_data(self, ws: Worksheet, df: pd.DataFrame) -> None:
        """Write DataFrame data to worksheet."""
        for col_idx, column in enumerate(df.columns, 1):
            ws.cell(row=1, column=col_idx, value=column)

        for row_idx, row in enumerate(df.itertuples(index=False), 2):
            for col_idx, value in enumerate(row, 1):
                cell = ws.cell(row=row_idx, column=col_idx)

                # Handle NaN values
                if pd.isna(value):
                    cell.value = ""
                elif isinstance(value, pd.Timestamp):
                    cell.value = value.to_pydatetime()
                else:
                    cell.value = value

    def _format_header(self, ws: Worksheet, num_cols: int) -> None:
        """Apply formatting to header row."""
        header_font = self._styles.get_header_font()
        header_fill = self._styles.get_header_fill()
        header_alignment = self._styles.get_header_alignment()
        border = self._styles.get_thin_border()

        for col_idx in range(1, num_cols + 1):
            cell = ws.cell(row=1, column=col_idx)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = border

        ws.row_dimensions[1].height = 30

    def _format_data_rows(
        self,
        ws: Worksheet,
        df: pd.DataFrame,
        highlight: Dict[str, str]
    ) -> None:
        """Apply formatting to data rows."""
        highlight_fill = self._styles.get_highlight_fill()
        highlight_font = self._styles.get_highlight_font()
        data_alignment = self._styles.get_data_alignment()
        border = self._styles.get_thin_border()

        highlighted_rows = set()
        for column, value in highlight.items():
            if column in df.columns:
                highlighted_rows.update(
                    idx for idx, cell_value in enumerate(df[column]) if cell_value == value
                )

        formats = [self._column_format(df, column) for column in df.columns]

        for row_idx in range(len(df)):
            excel_row = row_idx + 2  # Excel rows are 1-indexed, header is row 1

            if row_idx in highlighted_rows:
                fill = highlight_fill
                font = highlight_font
            else:
                fill = self._styles.get_row_fill(row_idx % 2 == 0)
                font = Font(size=11)

            for col_idx, number_format in enumerate(formats, 1):
                cell = ws.cell(row=excel_row, column=col_idx)
                cell.fill = fill
                cell.font = font
                cell.alignment = data_alignment
                cell.border = border
                if number_format:
                    cell.number_format = number_format

    def _column_format(self, df: pd.DataFrame, column: str) -> Optional[str]:
        """Number format for a column, or None for text columns."""
        dtype = df[column].dtype
        if pd.api.types.is_datetime64_any_dtype(dtype):
            return self._styles.get_datetime_format()
        if pd.api.types.is_integer_dtype(dtype):
            return self._styles.get_integer_format()
        if pd.api.types.is_float_dtype(dtype):
            return self._styles.get_number_format()
        return None

    def _auto_size_columns(self, ws: Worksheet, df: pd.DataFrame) -> None:
        """Auto-size column widths based on content."""
        for col_idx, column in enumerate(df.columns, 1):
            max_length = len(str(column))

            for cell_value in df[column]:
                if pd.notna(cell_value):
                    max_length = max(max_length, len(str(cell_value)))

            # Add padding and set width
            adjusted_width = min(max_length + 3, 50)  # Cap at 50 chars
            adjusted_width = max(adjusted_width, 10)   # Minimum 10 chars

            col_letter = get_column_letter(col_idx)
            ws.column_dimensions[col_letter].width = adjusted_width


# Singleton instance
_formatter_instance: Optional[ExcelFormatter] = None


def get_excel_formatter() -> ExcelFormatter:
    """Get or create the Excel formatter singleton."""
    global _formatter_instance
    if _formatter_instance is None:
        _formatter_instance = ExcelFormatter()
    return _formatter_instance
