"""
Application settings and configuration management.

This module provides centralized configuration using the Settings pattern,
enabling easy customization and environment-specific overrides.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import os

from ..core.models import SchemaMap, SCHEMA_V1


@dataclass(frozen=True)
class PathSettings:
    """File and directory path configurations."""

    base_dir: Path = field(default_factory=lambda: Path(__file__).parent.parent.parent)
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("JOURNEY_DATA_DIR", Path(__file__).parent.parent.parent / "data")
        )
    )
    output_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("JOURNEY_OUTPUT_DIR", Path(__file__).parent.parent.parent / "result")
        )
    )

    def ensure_output_dir(self) -> Path:
        """Create the output directory if needed and return it."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir


@dataclass(frozen=True)
class FileSettings:
    """Input/output file configurations."""

    input_file: str = "journeys.csv"
    output_workbook: str = "journey_analysis.xlsx"
    report_file: str = "journey_report.docx"
    encodings_input: Tuple[str, ...] = ("utf-8-sig", "latin1")
    delimiter: str = ","


@dataclass(frozen=True)
class QuerySettings:
    """Bounds for the daily analytical queries."""

    min_duration: float = 90.0  # minutes
    min_avg_speed: float = 0.0  # kph
    max_avg_speed: float = float("inf")  # kph


@dataclass(frozen=True)
class TimeSettings:
    """Time zone and batch date defaults."""

    timezone: str = field(
        default_factory=lambda: os.environ.get("JOURNEY_TIMEZONE", "America/Los_Angeles")
    )
    default_batch_date: str = "2021-10-05"


@dataclass
class Settings:
    """Main application settings container."""

    paths: PathSettings = field(default_factory=PathSettings)
    files: FileSettings = field(default_factory=FileSettings)
    queries: QuerySettings = field(default_factory=QuerySettings)
    time: TimeSettings = field(default_factory=TimeSettings)
    schema: SchemaMap = field(default_factory=lambda: SCHEMA_V1)

    @property
    def input_path(self) -> Path:
        """Full path to input file."""
        return self.paths.data_dir / self.files.input_file

    @property
    def workbook_path(self) -> Path:
        """Full path to the exported workbook."""
        return self.paths.output_dir / self.files.output_workbook

    @property
    def report_path(self) -> Path:
        """Full path to report file."""
        return self.paths.output_dir / self.files.report_file


# Singleton pattern for settings
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the settings singleton instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
