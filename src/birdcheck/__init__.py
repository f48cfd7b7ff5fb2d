"""
birdcheck - End-to-end checks for a bird identification website

Uploads sample images, reads the predicted species and confidence score,
and records per-case diagnostics, screenshots and an HTML report.
"""

from .analyzer import FailureAnalyzer
from .birdcheck import BirdCheck
from .models import DiagnosticRecord, FailureReport, Fixture
from .recorder import DiagnosticRecorder, ResultsStore, RunContext
from .report import ReportGenerator

__all__ = [
    "BirdCheck",
    "DiagnosticRecord",
    "DiagnosticRecorder",
    "FailureAnalyzer",
    "FailureReport",
    "Fixture",
    "ReportGenerator",
    "ResultsStore",
    "RunContext",
]
