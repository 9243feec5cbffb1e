"""
Data loading service for journey batch files.

This module reads the raw lines of a daily batch file, with robust handling
of encodings, and extracts the batch date from the file name.
"""

from pathlib import Path
from typing import List, Optional
import logging

from ..config import Settings, get_settings
from ..core.utils import extract_batch_date

logger = logging.getLogger(__name__)


class DataLoaderService:
    """
    Service for loading journey lines from batch files.

    Handles file reading and encoding detection. Lines are returned
    unparsed; cleaning is the job of the cleaner service.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the data loader service.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()

    def load(self, file_path: Optional[Path] = None) -> List[str]:
        """
        Load raw journey lines from a batch file.

        Args:
            file_path: Path to the batch file. If None, uses default from settings.

        Returns:
            All lines in file order, blank ones included, without line terminators

        Raises:
            FileNotFoundError: If the specified file doesn't exist
            ValueError: If the file cannot be decoded
        """
        path = Path(file_path) if file_path else self._settings.input_path

        logger.info(f"Loading data from: {path}")

        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        text = None
        last_error = None

        for encoding in self._settings.files.encodings_input:
            try:
                text = path.read_text(encoding=encoding)
                logger.info(f"Successfully loaded with encoding: {encoding}")
                break
            except UnicodeDecodeError as e:
                last_error = e
                continue

        if text is None:
            raise ValueError(f"Failed to decode {path} with any encoding: {last_error}")

        lines = text.splitlines()
        blank = sum(1 for line in lines if not line.strip())
        logger.info(f"Loaded {len(lines)} lines ({blank} blank)")

        return lines

    def batch_date(self, file_path: Path, override: Optional[str] = None) -> str:
        """
        Batch date for a file.

        Args:
            file_path: Path to the batch file
            override: Explicit batch date, returned as-is when given

        Returns:
            The override, the date in the file name, or the configured default
        """
        if override:
            return override
        return extract_batch_date(file_path, self._settings.time.default_batch_date)
