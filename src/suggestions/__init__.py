"""Suggestion parsing components."""

from suggestions.parser import (
    MarkerConvention,
    ParsedSuggestion,
    SectionField,
    SuggestionParser,
    parse_suggestion,
)

__all__ = [
    "MarkerConvention",
    "ParsedSuggestion",
    "SectionField",
    "SuggestionParser",
    "parse_suggestion",
]
