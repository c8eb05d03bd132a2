from enum import StrEnum
from typing import Any

from models.scan import ChartSeries, Violation


class SeverityLevel(StrEnum):
    """Violation severity levels in order of importance."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SeverityClassifier:
    """Summarize violations by severity."""

    SEVERITY_COLORS = {
        SeverityLevel.CRITICAL: "#e74c3c",
        SeverityLevel.HIGH: "#f39c12",
        SeverityLevel.MEDIUM: "#3498db",
        SeverityLevel.LOW: "#2ecc71",
    }

    # Risk score thresholds (score strictly above the bound)
    HIGH_RISK_THRESHOLD = 70
    MEDIUM_RISK_THRESHOLD = 40

    def color(self, severity: str) -> str:
        """Display colour for a severity."""
        try:
            return self.SEVERITY_COLORS[SeverityLevel(severity.lower())]
        except ValueError:
            return self.SEVERITY_COLORS[SeverityLevel.LOW]

    def count_by_severity(self, violations: list[Violation]) -> dict[str, int]:
        """
        Count violations per reported severity.

        All four levels are always present. Unrecognized severities are
        counted under their own key.

        Args:
            violations: Violations to count

        Returns:
            Mapping of severity to count
        """
        counts: dict[str, int] = {level.value: 0 for level in SeverityLevel}
        for violation in violations:
            severity = violation.severity.lower()
            counts[severity] = counts.get(severity, 0) + 1
        return counts

    def get_severity_stats(self, violations: list[Violation]) -> dict[str, Any]:
        """
        Get statistics about severity distribution.

        Args:
            violations: List of violations

        Returns:
            Statistics dictionary with counts, percentages and total
        """
        counts = self.count_by_severity(violations)
        total = len(violations)

        percentages: dict[str, float] = {}
        for severity, count in counts.items():
            percentages[severity] = round(count / total * 100, 1) if total else 0.0

        return {"counts": counts, "percentages": percentages, "total": total}

    def risk_level(self, risk_score: float) -> RiskLevel:
        """
        Band a 0-100 risk score.

        Args:
            risk_score: Risk score reported by the scanner

        Returns:
            Risk level
        """
        if risk_score > self.HIGH_RISK_THRESHOLD:
            return RiskLevel.HIGH
        if risk_score > self.MEDIUM_RISK_THRESHOLD:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def chart_series(self, counts: dict[str, int]) -> ChartSeries:
        """Doughnut chart data for the given severity counts."""
        return ChartSeries(
            labels=[severity.upper() for severity in counts],
            data=list(counts.values()),
            background_color=[self.color(severity) for severity in counts],
        )
