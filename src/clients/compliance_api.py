import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from models.scan import ScanResult
from models.search import ComplianceRecord, ViolationRecord

logger = logging.getLogger(__name__)


class DashboardAPIError(Exception):
    """Raised when the remote compliance API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ComplianceAPIClient:
    """Client for the remote scan, search and PDF generation API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        pdf_timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the compliance API
            timeout: Timeout for scan and search requests in seconds
            pdf_timeout: Timeout for PDF generation in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.pdf_timeout = pdf_timeout
        self._transport = transport

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or self.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        async with self._client(timeout) as client:
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                detail = _error_detail(e.response)
                logger.warning(f"{method} {path} returned {e.response.status_code}: {detail}")
                raise DashboardAPIError(f"{failure}: {detail}", e.response.status_code) from e
            except httpx.RequestError as e:
                logger.error(f"{method} {path} failed: {e}")
                raise DashboardAPIError(f"{failure}: {e}") from e

    async def scan(self, url: str) -> ScanResult:
        """
        Submit a URL for scanning.

        Args:
            url: Page to scan

        Returns:
            Raw scan result
        """
        response = await self._request("POST", "/api/scan", "Scan failed", json={"url": url})
        try:
            return ScanResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected scan response for {url}: {e}")
            raise DashboardAPIError(
                "Scan failed: Invalid server response", response.status_code
            ) from e

    async def search_semantic(self, query: str) -> list[ViolationRecord]:
        """Search indexed violations by natural language query."""
        response = await self._request(
            "POST", "/api/search/semantic", "Search failed", json={"query": query}
        )
        return self._search_results(response, ViolationRecord, key="results")

    async def search_compliance(self, min_score: int) -> list[ComplianceRecord]:
        """List domains whose compliance score is at least ``min_score`` percent."""
        response = await self._request(
            "GET", "/api/search/compliance", "Search failed", params={"minScore": min_score}
        )
        return self._search_results(response, ComplianceRecord)

    async def search_violations(self, violation_id: str) -> list[ViolationRecord]:
        """Find indexed occurrences of a rule violation."""
        response = await self._request(
            "GET",
            "/api/search/violations",
            "Search failed",
            params={"violationId": violation_id},
        )
        return self._search_results(response, ViolationRecord)

    @staticmethod
    def _search_results(
        response: httpx.Response,
        model: type[BaseModel],
        key: str | None = None,
    ) -> list[BaseModel]:
        """
        Validate a search response body.

        Args:
            response: Successful search response
            model: Record type of each result
            key: Key holding the result list, None if the body is the list itself

        Returns:
            Validated records
        """
        try:
            data = response.json()
            if key is not None:
                if not isinstance(data, dict):
                    raise ValueError(f"expected an object, got {type(data).__name__}")
                data = data.get(key)
            data = data or []
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [model.model_validate(record) for record in data]
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected search response from {response.url}: {e}")
            raise DashboardAPIError(
                "Search failed: Invalid server response", response.status_code
            ) from e

    async def generate_pdf(self, report_data: dict[str, Any]) -> bytes:
        """
        Render a report as PDF.

        Args:
            report_data: Report payload, see ReportBuilder.pdf_payload

        Returns:
            PDF document bytes
        """
        response = await self._request(
            "POST",
            "/generate-pdf",
            "Failed to download PDF",
            timeout=self.pdf_timeout,
            json={"data": report_data},
        )
        return response.content

    async def ping(self) -> bool:
        """Check that the API is reachable."""
        try:
            async with self._client() as client:
                response = await client.get("/")
                return response.status_code < 500
        except httpx.HTTPError as e:
            logger.warning(f"Compliance API not reachable: {e}")
            return False


def _error_detail(response: httpx.Response) -> str:
    """Pull a readable error message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or "Invalid server response"

    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or "Unknown error")
    return response.text
