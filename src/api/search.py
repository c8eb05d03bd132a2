import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_api_client, get_search_history
from clients.compliance_api import ComplianceAPIClient, DashboardAPIError
from models.search import (
    ComplianceSearchResponse,
    SearchHistoryEntry,
    SearchMode,
    SemanticSearchRequest,
    ViolationSearchResponse,
)
from search.history import SearchHistory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/search", tags=["search"])

NO_RESULTS = "No results found. Try different search terms."


def _upstream_error(e: DashboardAPIError) -> HTTPException:
    logger.error(f"Search failed: {e.message}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)


@router.post(
    "/semantic",
    response_model=ViolationSearchResponse,
    summary="Semantic search",
    description="Search indexed violations with a natural language query",
)
async def semantic_search(
    search_request: SemanticSearchRequest,
    api_client: ComplianceAPIClient = Depends(get_api_client),
    history: SearchHistory = Depends(get_search_history),
) -> ViolationSearchResponse:
    query = search_request.query.strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter a search query"
        )

    try:
        results = await api_client.search_semantic(query)
    except DashboardAPIError as e:
        raise _upstream_error(e)

    history.record(SearchMode.SEMANTIC, query=query)
    return ViolationSearchResponse(
        mode=SearchMode.SEMANTIC, results=results, message=None if results else NO_RESULTS
    )


@router.get(
    "/compliance",
    response_model=ComplianceSearchResponse,
    summary="Compliance search",
    description="List domains at or above a minimum compliance score",
)
async def compliance_search(
    min_score: int = Query(default=80, ge=0, le=100, description="Minimum score in percent"),
    api_client: ComplianceAPIClient = Depends(get_api_client),
    history: SearchHistory = Depends(get_search_history),
) -> ComplianceSearchResponse:
    try:
        results = await api_client.search_compliance(min_score)
    except DashboardAPIError as e:
        raise _upstream_error(e)

    history.record(SearchMode.COMPLIANCE, min_score=min_score)
    return ComplianceSearchResponse(
        mode=SearchMode.COMPLIANCE, results=results, message=None if results else NO_RESULTS
    )


@router.get(
    "/violations",
    response_model=ViolationSearchResponse,
    summary="Violation search",
    description="Find indexed occurrences of a rule violation",
)
async def violation_search(
    violation_id: str = Query(default="", description="Rule identifier, e.g. color-contrast"),
    api_client: ComplianceAPIClient = Depends(get_api_client),
    history: SearchHistory = Depends(get_search_history),
) -> ViolationSearchResponse:
    violation_id = violation_id.strip()
    try:
        results = await api_client.search_violations(violation_id)
    except DashboardAPIError as e:
        raise _upstream_error(e)

    history.record(SearchMode.VIOLATION, query=violation_id)
    return ViolationSearchResponse(
        mode=SearchMode.VIOLATION, results=results, message=None if results else NO_RESULTS
    )


@router.get(
    "/history",
    response_model=list[SearchHistoryEntry],
    summary="Recent searches",
)
async def search_history(
    history: SearchHistory = Depends(get_search_history),
) -> list[SearchHistoryEntry]:
    return history.entries()
