"""Output generation for on-call summaries (text, PDF, debug)."""

from oncallsummary.output.debug_generator import DebugGenerator
from oncallsummary.output.pdf_generator import PDFGenerator
from oncallsummary.output.summary_reporter import SummaryReporter

__all__ = [
    "DebugGenerator",
    "PDFGenerator",
    "SummaryReporter",
]
