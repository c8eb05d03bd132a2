from fastapi import Request

from clients.compliance_api import ComplianceAPIClient
from report.builder import ReportBuilder
from search.history import SearchHistory


def get_api_client(request: Request) -> ComplianceAPIClient:
    return request.app.state.api_client


def get_report_builder(request: Request) -> ReportBuilder:
    return request.app.state.report_builder


def get_search_history(request: Request) -> SearchHistory:
    return request.app.state.search_history
