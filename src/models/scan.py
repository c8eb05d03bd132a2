from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from suggestions.parser import ParsedSuggestion


class ScanModel(BaseModel):
    """Base for scan API records: camelCase on the wire, unknown fields kept."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


class SuggestionPayload(ScanModel):
    """Suggestion attached to a finding by the scanner."""

    suggestion: str | None = Field(default=None, description="Generated remediation text")
    fallback: str | None = Field(default=None, description="Static fallback advice")


class ViolationNode(ScanModel):
    """Page element affected by a violation."""

    html: str = Field(default="", description="Outer HTML of the element")
    target: list[str] = Field(default_factory=list, description="CSS selectors for the element")


class Violation(ScanModel):
    """A single accessibility rule violation."""

    id: str = Field(..., description="Rule identifier, e.g. image-alt")
    severity: str = Field(default="low", description="critical, high, medium or low")
    description: str = Field(default="", description="Human readable rule description")
    nodes: list[ViolationNode] = Field(default_factory=list, description="Affected elements")
    tags: list[str] = Field(default_factory=list, description="Standards the rule maps to")
    help_url: str | None = Field(default=None, description="Link to rule documentation")
    suggestion: SuggestionPayload | None = Field(default=None, description="Remediation advice")


class KeyboardIssue(ScanModel):
    """Keyboard navigation finding."""

    type: str = Field(default="", description="Issue type")
    message: str = Field(default="", description="Issue description")
    element: str = Field(default="", description="Affected element")


class ScreenReaderIssue(KeyboardIssue):
    """Screen reader finding, optionally with remediation advice."""

    suggestion: SuggestionPayload | None = Field(default=None, description="Remediation advice")


class ScanMetrics(ScanModel):
    """Aggregate metrics reported by the scanner."""

    risk_score: float = Field(default=0, description="0 = perfect, 100 = completely inaccessible")
    elements_scanned: int | None = Field(default=None, description="Number of elements scanned")


class ScanResult(ScanModel):
    """Raw scan result as returned by the scan API."""

    url: str = Field(..., description="Scanned URL")
    scanned_at: str | None = Field(default=None, description="Scan timestamp (ISO 8601)")
    violations: list[Violation] = Field(default_factory=list)
    keyboard_issues: list[KeyboardIssue] = Field(default_factory=list)
    screen_reader_issues: list[ScreenReaderIssue] = Field(default_factory=list)
    metrics: ScanMetrics = Field(default_factory=ScanMetrics)

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://www.example.gov",
                "scannedAt": "2024-05-01T12:00:00Z",
                "violations": [
                    {
                        "id": "image-alt",
                        "severity": "critical",
                        "description": "Images must have alternate text",
                        "nodes": [{"html": '<img src="logo.png">'}],
                        "tags": ["wcag2a", "section508"],
                        "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
                        "suggestion": {"suggestion": "### Concise Technical Explanation\n..."},
                    }
                ],
                "keyboardIssues": [],
                "screenReaderIssues": [],
                "metrics": {"riskScore": 42, "elementsScanned": 312},
            }
        }


class ScanRequest(BaseModel):
    """Request to scan a URL."""

    url: str = Field(..., description="URL to scan")

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        value = value.strip()
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError("Please enter a valid URL (e.g., https://example.com)")
        return value


class AnnotatedViolation(Violation):
    """Violation with its suggestion parsed for display."""

    parsed_suggestion: ParsedSuggestion | None = None
    recommended_fix: str = ""


class AnnotatedScreenReaderIssue(ScreenReaderIssue):
    """Screen reader issue with its suggestion parsed for display."""

    parsed_suggestion: ParsedSuggestion | None = None
    recommended_fix: str = ""


class ChartSeries(ScanModel):
    """Doughnut chart data for the severity distribution."""

    labels: list[str] = Field(default_factory=list)
    data: list[int] = Field(default_factory=list)
    background_color: list[str] = Field(default_factory=list)


class SeveritySummary(ScanModel):
    """Compliance summary shown next to the findings."""

    counts: dict[str, int] = Field(default_factory=dict)
    percentages: dict[str, float] = Field(default_factory=dict)
    total_issues: int = 0
    elements_scanned: int | None = None
    risk_score: float = 0
    risk_level: str = "low"
    chart: ChartSeries = Field(default_factory=ChartSeries)


class AccessibilityReport(ScanModel):
    """Scan result prepared for rendering."""

    url: str
    scanned_at: str | None = None
    violations: list[AnnotatedViolation] = Field(default_factory=list)
    keyboard_issues: list[KeyboardIssue] = Field(default_factory=list)
    screen_reader_issues: list[AnnotatedScreenReaderIssue] = Field(default_factory=list)
    metrics: ScanMetrics = Field(default_factory=ScanMetrics)
    summary: SeveritySummary = Field(default_factory=SeveritySummary)
