"""Async HTTP client for the PowerDesk API."""

from powerdesk.client.dashboard import Dashboard, DashboardClient, DashboardSnapshot

__all__ = ["Dashboard", "DashboardClient", "DashboardSnapshot"]
