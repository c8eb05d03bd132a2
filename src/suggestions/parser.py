"""Split free-text remediation suggestions into structured sections."""

import re
from enum import StrEnum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class MarkerConvention(StrEnum):
    """Heading conventions, in the order they are tried."""

    HEADING = "heading"
    NUMBERED_LABEL = "numbered_label"


class SectionField(StrEnum):
    """Sections of a suggestion, in template order."""

    EXPLANATION = "explanation"
    FIXED_MARKUP = "fixed_markup"
    STEPS = "steps"
    STANDARDS_REFERENCE = "standards_reference"


class ParsedSuggestion(BaseModel):
    """Structured view of a single remediation suggestion."""

    explanation: str = Field(default="", description="Description of the accessibility problem")
    fixed_markup: str = Field(default="", description="Corrected markup example")
    steps: list[str] = Field(default_factory=list, description="Ordered remediation steps")
    standards_reference: str = Field(default="", description="Applicable standard clause")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "explanation": "Missing alt attribute.",
                "fixedMarkup": '<img alt="desc">',
                "steps": ["Add alt attribute", "Verify with screen reader"],
                "standardsReference": "1.1.1 Non-text Content",
            }
        }


_HEADING = r"#{1,6}[ \t]*"
_LABEL_END = r"[ \t]*:?"

# Patterns contain no nested quantifiers so matching stays linear.
MARKER_PATTERNS: dict[MarkerConvention, dict[SectionField, re.Pattern[str]]] = {
    MarkerConvention.HEADING: {
        SectionField.EXPLANATION: re.compile(
            _HEADING + r"concise technical explanation" + _LABEL_END, re.IGNORECASE
        ),
        SectionField.FIXED_MARKUP: re.compile(
            _HEADING + r"fixed html snippet" + _LABEL_END, re.IGNORECASE
        ),
        SectionField.STEPS: re.compile(
            _HEADING + r"implementation steps" + _LABEL_END, re.IGNORECASE
        ),
        SectionField.STANDARDS_REFERENCE: re.compile(
            _HEADING + r"wcag reference" + _LABEL_END, re.IGNORECASE
        ),
    },
    MarkerConvention.NUMBERED_LABEL: {
        SectionField.EXPLANATION: re.compile(
            r"1\.[ \t]*explanation(?:[ \t]+of[ \t]+(?:this|the)[ \t]+[\w-]+[ \t]+violation)?"
            + _LABEL_END,
            re.IGNORECASE,
        ),
        SectionField.FIXED_MARKUP: re.compile(
            r"2\.[ \t]*fixed html(?:[ \t]+(?:code|snippet))?" + _LABEL_END, re.IGNORECASE
        ),
        SectionField.STEPS: re.compile(
            r"3\.[ \t]*implementation steps" + _LABEL_END, re.IGNORECASE
        ),
        SectionField.STANDARDS_REFERENCE: re.compile(r"wcag reference" + _LABEL_END, re.IGNORECASE),
    },
}

_ORDINAL_PREFIX = re.compile(r"^\d+\.\s*")
# A doubled asterisk is bold text, not a bullet.
_BULLET_PREFIX = re.compile(r"^(?:[-+•‣◦▪]|\*(?!\*))\s*")
_STEPS_LABEL = re.compile(r"[#*_ \t]*implementation steps[*_ \t:]*", re.IGNORECASE)


class SuggestionParser:
    """Parse suggestions against an ordered table of marker conventions."""

    def __init__(
        self,
        conventions: tuple[MarkerConvention, ...] = (
            MarkerConvention.HEADING,
            MarkerConvention.NUMBERED_LABEL,
        ),
    ):
        """
        Initialize the parser.

        Args:
            conventions: Marker conventions to try for each section, highest priority first
        """
        self.conventions = conventions

    def parse(self, text: str | None) -> ParsedSuggestion | None:
        """
        Parse a raw suggestion into its sections.

        Args:
            text: Raw suggestion text, or None when no suggestion exists

        Returns:
            ParsedSuggestion, or None if there was no text to parse
        """
        if text is None:
            return None

        markers = self._locate_markers(text)
        boundaries = sorted(match.start() for match in markers.values())

        sections: dict[SectionField, str] = {}
        for section, match in markers.items():
            end = next((pos for pos in boundaries if pos >= match.end()), len(text))
            sections[section] = text[match.end() : end].strip()

        explanation = sections.get(SectionField.EXPLANATION, "")
        fixed_markup = sections.get(SectionField.FIXED_MARKUP, "")

        if not explanation and not fixed_markup:
            return ParsedSuggestion(explanation=text.strip())

        return ParsedSuggestion(
            explanation=explanation,
            fixed_markup=fixed_markup,
            steps=self.split_steps(sections.get(SectionField.STEPS, "")),
            standards_reference=sections.get(SectionField.STANDARDS_REFERENCE, ""),
        )

    def _locate_markers(self, text: str) -> dict[SectionField, re.Match[str]]:
        """Find the first marker of each section, trying conventions in priority order."""
        markers: dict[SectionField, re.Match[str]] = {}
        for section in SectionField:
            for convention in self.conventions:
                match = MARKER_PATTERNS[convention][section].search(text)
                if match:
                    markers[section] = match
                    break
        return markers

    @staticmethod
    def split_steps(block: str) -> list[str]:
        """
        Split a steps block into individual instructions.

        Ordinal and bullet prefixes are removed. Blank lines and lines that
        only repeat the "implementation steps" label are dropped.

        Args:
            block: Text of the steps section

        Returns:
            Steps in their original order
        """
        steps = []
        for line in block.splitlines():
            step = _ORDINAL_PREFIX.sub("", line.strip())
            step = _BULLET_PREFIX.sub("", step).strip()
            if not step or _STEPS_LABEL.fullmatch(step):
                continue
            steps.append(step)
        return steps


_default_parser = SuggestionParser()


def parse_suggestion(text: str | None) -> ParsedSuggestion | None:
    """Parse a suggestion with the default convention order."""
    return _default_parser.parse(text)
