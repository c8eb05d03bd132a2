"""Request and response contracts for the dashboard and the remote compliance API."""

from models.scan import (
    AccessibilityReport,
    AnnotatedScreenReaderIssue,
    AnnotatedViolation,
    ScanRequest,
    ScanResult,
    SeveritySummary,
    Violation,
)
from models.search import (
    ComplianceRecord,
    ComplianceSearchResponse,
    SearchHistoryEntry,
    SearchMode,
    ViolationRecord,
    ViolationSearchResponse,
)

__all__ = [
    "AccessibilityReport",
    "AnnotatedScreenReaderIssue",
    "AnnotatedViolation",
    "ComplianceRecord",
    "ComplianceSearchResponse",
    "ScanRequest",
    "ScanResult",
    "SearchHistoryEntry",
    "SearchMode",
    "SeveritySummary",
    "Violation",
    "ViolationRecord",
    "ViolationSearchResponse",
]
