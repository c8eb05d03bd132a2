import logging
import re
from typing import Any

from models.scan import (
    AccessibilityReport,
    AnnotatedScreenReaderIssue,
    AnnotatedViolation,
    ScanResult,
    SeveritySummary,
    SuggestionPayload,
)
from report.severity import SeverityClassifier
from suggestions.parser import ParsedSuggestion, SuggestionParser

logger = logging.getLogger(__name__)

NO_SUGGESTION = "No suggestion available"

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]")


class ReportBuilder:
    """Turn raw scan results into render-ready reports."""

    def __init__(
        self,
        parser: SuggestionParser | None = None,
        severity_classifier: SeverityClassifier | None = None,
    ):
        """
        Initialize the report builder.

        Args:
            parser: Suggestion parser, defaults to the standard convention order
            severity_classifier: Severity classifier used for the summary
        """
        self.parser = parser or SuggestionParser()
        self.severity_classifier = severity_classifier or SeverityClassifier()

    def build(self, scan: ScanResult) -> AccessibilityReport:
        """
        Build a report with parsed suggestions and a severity summary.

        Args:
            scan: Raw scan result

        Returns:
            Render-ready report
        """
        violations = []
        for violation in scan.violations:
            parsed = self.parse(violation.suggestion)
            violations.append(
                AnnotatedViolation.model_validate(
                    {
                        **violation.model_dump(),
                        "parsed_suggestion": parsed,
                        "recommended_fix": self.recommended_fix(violation.suggestion),
                    }
                )
            )

        screen_reader_issues = []
        for issue in scan.screen_reader_issues:
            parsed = self.parse(issue.suggestion)
            screen_reader_issues.append(
                AnnotatedScreenReaderIssue.model_validate(
                    {
                        **issue.model_dump(),
                        "parsed_suggestion": parsed,
                        "recommended_fix": self.recommended_fix(issue.suggestion),
                    }
                )
            )

        parsed_count = sum(1 for v in violations if v.parsed_suggestion is not None)
        logger.debug(
            f"Built report for {scan.url}: {len(violations)} violations, "
            f"{parsed_count} with suggestions, {len(screen_reader_issues)} screen reader issues"
        )

        return AccessibilityReport(
            url=scan.url,
            scanned_at=scan.scanned_at,
            violations=violations,
            keyboard_issues=scan.keyboard_issues,
            screen_reader_issues=screen_reader_issues,
            metrics=scan.metrics,
            summary=self.summarize(scan),
        )

    def parse(self, payload: SuggestionPayload | None) -> ParsedSuggestion | None:
        """Parse the raw text of a nested suggestion, if any."""
        text = payload.suggestion if payload else None
        parsed = self.parser.parse(text)
        if text and parsed == ParsedSuggestion(explanation=text.strip()):
            logger.debug("Suggestion did not match a known template, showing raw text")
        return parsed

    def recommended_fix(self, payload: SuggestionPayload | None) -> str:
        """Text to show when a suggestion cannot be displayed in structured form."""
        if payload is None:
            return NO_SUGGESTION
        return payload.suggestion or payload.fallback or NO_SUGGESTION

    def summarize(self, scan: ScanResult) -> SeveritySummary:
        """
        Compute the compliance summary for a scan.

        Args:
            scan: Raw scan result

        Returns:
            Severity counts, percentages, risk banding and chart series
        """
        stats = self.severity_classifier.get_severity_stats(scan.violations)
        risk_score = scan.metrics.risk_score

        return SeveritySummary(
            counts=stats["counts"],
            percentages=stats["percentages"],
            total_issues=stats["total"],
            elements_scanned=scan.metrics.elements_scanned,
            risk_score=risk_score,
            risk_level=self.severity_classifier.risk_level(risk_score).value,
            chart=self.severity_classifier.chart_series(stats["counts"]),
        )

    def pdf_payload(self, scan: ScanResult) -> dict[str, Any]:
        """
        Build the payload sent to the PDF generator.

        Every violation and screen reader issue carries its parsed suggestion,
        and keyboard and screen reader issue lists are always present.

        Args:
            scan: Raw scan result

        Returns:
            JSON-serializable report data
        """
        data = scan.model_dump(mode="json", by_alias=True)

        data["violations"] = [
            {**raw, "parsedSuggestion": self._dump(self.parse(violation.suggestion))}
            for raw, violation in zip(data.get("violations", []), scan.violations, strict=True)
        ]
        data["keyboardIssues"] = data.get("keyboardIssues") or []
        data["screenReaderIssues"] = [
            {**raw, "parsedSuggestion": self._dump(self.parse(issue.suggestion))}
            for raw, issue in zip(
                data.get("screenReaderIssues", []), scan.screen_reader_issues, strict=True
            )
        ]
        return data

    @staticmethod
    def pdf_filename(url: str) -> str:
        """File name for a downloaded report, e.g. accessibility-report-www.example.gov.pdf"""
        target = _SCHEME.sub("", url.strip()).rstrip("/")
        return f"accessibility-report-{_UNSAFE_FILENAME_CHARS.sub('-', target)}.pdf"

    @staticmethod
    def _dump(parsed: ParsedSuggestion | None) -> dict[str, Any] | None:
        return parsed.model_dump(by_alias=True) if parsed else None
