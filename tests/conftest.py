"""Test fixtures and configuration."""
import pytest
import pytest_asyncio
from pathlib import Path

import httpx

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


HEADING_SUGGESTION = (
    "### Concise Technical Explanation\n"
    "Missing alt attribute.\n"
    "### Fixed HTML Snippet\n"
    '<img alt="desc">\n'
    "### Implementation Steps\n"
    "1. Add alt attribute\n"
    "2. Verify with screen reader\n"
    "### WCAG Reference\n"
    "1.1.1 Non-text Content"
)

NUMBERED_SUGGESTION = (
    "1. Explanation of this color-contrast violation\n"
    "Text has insufficient contrast against its background.\n"
    "2. Fixed HTML code\n"
    '<p style="color: #595959">Readable text</p>\n'
    "3. Implementation steps\n"
    "1. Darken the text colour\n"
    "2. Re-run the contrast checker\n"
    "WCAG reference: 1.4.3 Contrast (Minimum)"
)


class StubComplianceAPI:
    """In-memory stand-in for the remote compliance API."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status_code=200, **kwargs):
        """Register a response; kwargs are passed to httpx.Response."""
        self.routes[(method, path)] = (status_code, kwargs)

    def fail(self, method, path, exc_type=httpx.ConnectError):
        """Make a route raise a transport error."""
        self.routes[(method, path)] = exc_type

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if isinstance(route, type):
            raise route("connection refused", request=request)
        status_code, kwargs = route
        return httpx.Response(status_code, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def heading_suggestion():
    """Suggestion using the markdown heading template."""
    return HEADING_SUGGESTION


@pytest.fixture
def numbered_suggestion():
    """Suggestion using the numbered label template."""
    return NUMBERED_SUGGESTION


@pytest.fixture
def sample_scan_payload():
    """Scan result as returned by POST /api/scan."""
    return {
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
                "impact": "critical",
                "suggestion": {"suggestion": HEADING_SUGGESTION},
            },
            {
                "id": "color-contrast",
                "severity": "high",
                "description": "Elements must meet minimum color contrast ratio thresholds",
                "nodes": [{"html": '<p class="muted">Fine print</p>'}],
                "tags": ["wcag2aa"],
                "suggestion": {"suggestion": NUMBERED_SUGGESTION},
            },
            {
                "id": "region",
                "severity": "medium",
                "description": "All page content should be contained by landmarks",
                "nodes": [],
                "suggestion": {"fallback": "Wrap content in landmark regions."},
            },
            {
                "id": "link-name",
                "severity": "medium",
                "description": "Links must have discernible text",
                "nodes": [],
            },
        ],
        "keyboardIssues": [
            {
                "type": "focus-trap",
                "message": "Focus is trapped in the modal",
                "element": "div.modal",
            }
        ],
        "screenReaderIssues": [
            {
                "type": "missing-label",
                "message": "Input has no accessible name",
                "element": "input#q",
                "suggestion": {"suggestion": "Add an aria-label to the search input."},
            }
        ],
        "metrics": {"riskScore": 55, "elementsScanned": 312},
    }


@pytest.fixture
def sample_scan(sample_scan_payload):
    """Parsed ScanResult."""
    from models.scan import ScanResult
    return ScanResult.model_validate(sample_scan_payload)


@pytest.fixture
def app_settings():
    """Settings isolated from the environment and any .env file."""
    from config.settings import Settings
    return Settings(api_base_url="http://compliance.test", _env_file=None)


@pytest.fixture
def api_stub():
    """Stubbed remote compliance API."""
    return StubComplianceAPI()


@pytest.fixture
def api_client(api_stub):
    """ComplianceAPIClient talking to the stub."""
    from clients.compliance_api import ComplianceAPIClient
    return ComplianceAPIClient("http://compliance.test", transport=api_stub.transport)


@pytest.fixture
def app(app_settings, api_client):
    """Application wired to the stubbed compliance API."""
    from main import create_app
    application = create_app(app_settings)
    application.state.api_client = api_client
    return application


@pytest_asyncio.fixture
async def async_client(app):
    """Async HTTP client bound to the application."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
