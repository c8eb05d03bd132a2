import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from api.dependencies import get_api_client
from clients.compliance_api import ComplianceAPIClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthStatus(BaseModel):
    """Health check response model."""

    status: str
    version: str = "1.0.0"


class ReadyStatus(BaseModel):
    """Readiness check response model."""

    status: str
    services: dict[str, str]
    version: str = "1.0.0"


@router.get(
    "/health",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Returns 200 if the application process is running",
)
async def health_check(request: Request) -> HealthStatus:
    """Liveness probe - indicates the process is running."""
    return HealthStatus(status="healthy", version=request.app.version)


@router.get(
    "/ready",
    response_model=ReadyStatus,
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    description="Returns 200 with the connectivity of upstream services",
)
async def ready_check(
    request: Request,
    api_client: ComplianceAPIClient = Depends(get_api_client),
) -> ReadyStatus:
    """Readiness probe - checks if the compliance API is reachable."""
    services = {}

    if await api_client.ping():
        services["compliance_api"] = "connected"
    else:
        logger.warning(f"Compliance API not ready at {api_client.base_url}")
        services["compliance_api"] = "disconnected"

    all_ready = all(state == "connected" for state in services.values())
    status_str = "ready" if all_ready else "not_ready"

    return ReadyStatus(status=status_str, services=services, version=request.app.version)
