"""Clients for remote services."""

from clients.compliance_api import ComplianceAPIClient, DashboardAPIError

__all__ = ["ComplianceAPIClient", "DashboardAPIError"]
