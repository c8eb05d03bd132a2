"""Tests for the report builder."""

from unittest.mock import Mock, patch

import pytest

from models.scan import ScanResult, SuggestionPayload
from report.builder import NO_SUGGESTION, ReportBuilder
from suggestions.parser import ParsedSuggestion, SuggestionParser


@pytest.mark.unit
class TestReportBuilder:
    """Test suite for ReportBuilder.build."""

    def setup_method(self):
        self.builder = ReportBuilder()

    def test_init_defaults(self):
        assert isinstance(self.builder.parser, SuggestionParser)
        assert self.builder.severity_classifier is not None

    def test_init_with_parser(self):
        parser = SuggestionParser()
        assert ReportBuilder(parser=parser).parser is parser

    def test_heading_suggestion_is_parsed(self, sample_scan):
        report = self.builder.build(sample_scan)
        parsed = report.violations[0].parsed_suggestion

        assert parsed == ParsedSuggestion(
            explanation="Missing alt attribute.",
            fixed_markup='<img alt="desc">',
            steps=["Add alt attribute", "Verify with screen reader"],
            standards_reference="1.1.1 Non-text Content",
        )

    def test_numbered_suggestion_is_parsed(self, sample_scan):
        report = self.builder.build(sample_scan)
        parsed = report.violations[1].parsed_suggestion

        assert parsed.fixed_markup == '<p style="color: #595959">Readable text</p>'
        assert parsed.standards_reference == "1.4.3 Contrast (Minimum)"

    def test_missing_suggestion_text_is_not_parsed(self, sample_scan):
        report = self.builder.build(sample_scan)

        assert report.violations[2].parsed_suggestion is None
        assert report.violations[3].parsed_suggestion is None

    def test_recommended_fix(self, sample_scan, heading_suggestion):
        report = self.builder.build(sample_scan)

        assert report.violations[0].recommended_fix == heading_suggestion
        assert report.violations[2].recommended_fix == "Wrap content in landmark regions."
        assert report.violations[3].recommended_fix == NO_SUGGESTION

    def test_screen_reader_issues_are_parsed(self, sample_scan):
        report = self.builder.build(sample_scan)
        issue = report.screen_reader_issues[0]

        assert issue.parsed_suggestion == ParsedSuggestion(
            explanation="Add an aria-label to the search input."
        )
        assert issue.element == "input#q"

    def test_violation_fields_are_preserved(self, sample_scan):
        report = self.builder.build(sample_scan)
        violation = report.violations[0]

        assert violation.id == "image-alt"
        assert violation.help_url == "https://dequeuniversity.com/rules/axe/4.8/image-alt"
        assert violation.nodes[0].html == '<img src="logo.png">'
        assert violation.model_dump(by_alias=True)["impact"] == "critical"

    def test_keyboard_issues_pass_through(self, sample_scan):
        report = self.builder.build(sample_scan)
        assert report.keyboard_issues[0].message == "Focus is trapped in the modal"

    def test_summary(self, sample_scan):
        summary = self.builder.build(sample_scan).summary

        assert summary.counts == {"critical": 1, "high": 1, "medium": 2, "low": 0}
        assert summary.percentages == {"critical": 25.0, "high": 25.0, "medium": 50.0, "low": 0.0}
        assert summary.total_issues == 4
        assert summary.elements_scanned == 312
        assert summary.risk_score == 55
        assert summary.risk_level == "medium"
        assert summary.chart.labels == ["CRITICAL", "HIGH", "MEDIUM", "LOW"]
        assert summary.chart.data == [1, 1, 2, 0]

    def test_empty_scan(self):
        report = self.builder.build(ScanResult(url="https://empty.example"))

        assert report.violations == []
        assert report.summary.total_issues == 0
        assert report.summary.risk_level == "low"

    @patch("report.builder.logger")
    def test_unstructured_suggestion_logged(self, mock_logger):
        self.builder.parse(SuggestionPayload(suggestion="  Add a label.  "))

        messages = [str(c) for c in mock_logger.debug.call_args_list]
        assert any("did not match a known template" in m for m in messages)

    @patch("report.builder.logger")
    def test_structured_suggestion_not_logged_as_unstructured(self, mock_logger):
        text = "Explain the issue."
        parser = Mock()
        parser.parse.return_value = ParsedSuggestion(explanation=text, steps=["Fix it"])
        builder = ReportBuilder(parser=parser)

        builder.parse(SuggestionPayload(suggestion=text))

        mock_logger.debug.assert_not_called()

    def test_uses_injected_parser(self, sample_scan):
        parser = Mock()
        parser.parse.return_value = ParsedSuggestion(explanation="stub")
        builder = ReportBuilder(parser=parser)

        report = builder.build(sample_scan)

        assert report.violations[0].parsed_suggestion.explanation == "stub"
        parser.parse.assert_any_call(sample_scan.violations[0].suggestion.suggestion)

    def test_report_serializes_camel_case(self, sample_scan):
        data = self.builder.build(sample_scan).model_dump(by_alias=True)

        assert data["scannedAt"] == "2024-05-01T12:00:00Z"
        assert data["violations"][0]["parsedSuggestion"]["fixedMarkup"] == '<img alt="desc">'
        assert data["violations"][0]["recommendedFix"]
        assert data["summary"]["riskLevel"] == "medium"
        assert data["summary"]["chart"]["backgroundColor"][0] == "#e74c3c"


@pytest.mark.unit
class TestPdfPayload:
    """Tests for the PDF payload and file name."""

    def setup_method(self):
        self.builder = ReportBuilder()

    def test_payload_contains_parsed_suggestions(self, sample_scan):
        payload = self.builder.pdf_payload(sample_scan)

        assert payload["url"] == "https://www.example.gov"
        assert payload["violations"][0]["parsedSuggestion"]["explanation"] == (
            "Missing alt attribute."
        )
        assert payload["violations"][3]["parsedSuggestion"] is None
        assert payload["screenReaderIssues"][0]["parsedSuggestion"]["explanation"] == (
            "Add an aria-label to the search input."
        )
        assert payload["keyboardIssues"][0]["type"] == "focus-trap"

    def test_payload_always_has_issue_lists(self):
        payload = self.builder.pdf_payload(ScanResult(url="https://empty.example"))

        assert payload["keyboardIssues"] == []
        assert payload["screenReaderIssues"] == []

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.example.gov", "accessibility-report-www.example.gov.pdf"),
            ("http://example.com/", "accessibility-report-example.com.pdf"),
            (
                "https://example.com/about/team?x=1",
                "accessibility-report-example.com-about-team-x-1.pdf",
            ),
        ],
    )
    def test_pdf_filename(self, url, expected):
        assert ReportBuilder.pdf_filename(url) == expected
