from datetime import datetime
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, Field


class SearchMode(StrEnum):
    SEMANTIC = "semantic"
    COMPLIANCE = "compliance"
    VIOLATION = "violation"


class SemanticSearchRequest(BaseModel):
    """Free-text query against the violation index."""

    query: str = Field(default="", description="Natural language search query")


class ComplianceRecord(BaseModel):
    """Per-domain compliance score from the index."""

    domain: str = Field(default="", description="Scanned domain")
    compliance_score: float = Field(default=0, description="Compliance score in percent")
    last_scanned: str | None = Field(default=None, description="Last scan timestamp")

    class Config:
        extra = "allow"


class ViolationRecord(BaseModel):
    """Indexed violation, as returned by semantic and violation searches."""

    domain: str = Field(default="", description="Domain the violation was found on")
    url: str = Field(default="", description="Page URL")
    title: str | None = Field(default=None, description="Page title")
    violation_id: str = Field(
        default="",
        validation_alias=AliasChoices("violationId", "violation_id"),
        description="Rule identifier",
    )
    severity: str = Field(default="low", description="critical, high, medium or low")
    description: str = Field(default="", description="Violation description")
    similarity: float | None = Field(default=None, description="Semantic similarity (0-1)")

    class Config:
        extra = "allow"
        populate_by_name = True


class SearchResponse(BaseModel):
    """Search results returned to the dashboard."""

    mode: SearchMode
    message: str | None = Field(default=None, description="Hint shown when nothing matched")


class ComplianceSearchResponse(SearchResponse):
    results: list[ComplianceRecord] = Field(default_factory=list)


class ViolationSearchResponse(SearchResponse):
    results: list[ViolationRecord] = Field(default_factory=list)


class SearchHistoryEntry(BaseModel):
    """A previously run search."""

    mode: SearchMode
    query: str | None = None
    min_score: int | None = None
    date: datetime
    label: str
