from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_report_builder
from report.builder import ReportBuilder
from suggestions.parser import ParsedSuggestion

router = APIRouter(tags=["suggestions"])


class ParseRequest(BaseModel):
    """Raw suggestion text to parse."""

    text: str | None = Field(default=None, description="Suggestion text, null if none exists")


@router.post(
    "/suggestions/parse",
    response_model=ParsedSuggestion | None,
    summary="Parse a suggestion",
    description="Split a free-text remediation suggestion into its sections",
)
async def parse_suggestion(
    parse_request: ParseRequest,
    builder: ReportBuilder = Depends(get_report_builder),
) -> ParsedSuggestion | None:
    return builder.parser.parse(parse_request.text)
