import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from api.dependencies import get_api_client, get_report_builder
from clients.compliance_api import ComplianceAPIClient, DashboardAPIError
from models.scan import AccessibilityReport, ScanRequest, ScanResult
from report.builder import ReportBuilder

logger = logging.getLogger(__name__)
router = APIRouter(tags=["scanner"])


@router.post(
    "/scan",
    response_model=AccessibilityReport,
    status_code=status.HTTP_200_OK,
    summary="Scan a URL",
    description="Scan a page for accessibility violations and return a render-ready report",
)
async def scan_url(
    scan_request: ScanRequest,
    api_client: ComplianceAPIClient = Depends(get_api_client),
    builder: ReportBuilder = Depends(get_report_builder),
) -> AccessibilityReport:
    """Scan a URL and build its report."""
    logger.info(f"Scanning {scan_request.url}")

    try:
        scan = await api_client.scan(scan_request.url)
    except DashboardAPIError as e:
        logger.error(f"Scan of {scan_request.url} failed: {e.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    report = builder.build(scan)
    logger.info(
        f"Scan of {scan.url} complete: {report.summary.total_issues} violations, "
        f"risk score {report.summary.risk_score}"
    )
    return report


@router.post(
    "/report/pdf",
    status_code=status.HTTP_200_OK,
    summary="Download PDF report",
    description="Render a scan result, with all findings and parsed suggestions, as PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_pdf(
    scan: ScanResult,
    api_client: ComplianceAPIClient = Depends(get_api_client),
    builder: ReportBuilder = Depends(get_report_builder),
) -> Response:
    """Generate the PDF report for a scan result."""
    try:
        pdf = await api_client.generate_pdf(builder.pdf_payload(scan))
    except DashboardAPIError as e:
        logger.error(f"PDF generation for {scan.url} failed: {e.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    filename = builder.pdf_filename(scan.url)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
