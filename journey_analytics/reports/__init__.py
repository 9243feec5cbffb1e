"""Reports module for rendering journey analysis results."""

from .console_reporter import ConsoleReporter
from .report_generator import ReportGenerator
from .docx_builder import DocxBuilder

__all__ = [
    "ConsoleReporter",
    "ReportGenerator",
    "DocxBuilder",
]
