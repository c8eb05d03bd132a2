"""Report preparation components."""

from report.builder import NO_SUGGESTION, ReportBuilder
from report.severity import RiskLevel, SeverityClassifier, SeverityLevel

__all__ = [
    "NO_SUGGESTION",
    "ReportBuilder",
    "RiskLevel",
    "SeverityClassifier",
    "SeverityLevel",
]
