"""Dashboard loader: parallel, individually fault-tolerant API fetches.

A load fans out one request per slice of data (property, meters, active
tariff and four reading windows). A slice whose request fails is treated
as "no data" and the rest still populate, so a dashboard always renders.
"""

import asyncio
import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx
from pydantic import BaseModel

from powerdesk.core.config import settings
from powerdesk.schemas.analytics import (
    AggregationResult,
    ReadingSnapshot,
    rows_from_raw,
    to_decimal,
)
from powerdesk.services import analytics

logger = logging.getLogger(__name__)


class DashboardSnapshot(BaseModel):
    """Everything fetched for one dashboard load."""

    property_name: str | None = None
    meters: list[dict[str, Any]] = []
    active_tariff: dict[str, Any] | None = None
    readings: ReadingSnapshot = ReadingSnapshot()

    @property
    def active_tariff_rate(self) -> Any:
        """Rate of today's tariff, or None when there is none."""
        if self.active_tariff is None:
            return None
        return self.active_tariff.get("rate_per_unit")


class Dashboard(BaseModel):
    """A loaded snapshot together with its computed analytics."""

    snapshot: DashboardSnapshot
    analytics: AggregationResult


class DashboardClient:
    """Loads property dashboards from the PowerDesk API.

    Pass an existing ``httpx.AsyncClient`` to share a connection pool (or a
    test transport); otherwise one is created from settings and closed with
    the ``async with`` block.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
        )

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str, default: Any, params: dict[str, str] | None = None) -> Any:
        """GET a JSON document, returning ``default`` on any fetch failure."""
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Fetch of %s failed, treating as empty: %s", path, exc)
            return default

    async def _fetch_property_name(self, property_id: int) -> str | None:
        data = await self._get_json(f"properties/{property_id}", None)
        if isinstance(data, Mapping) and data.get("name") is not None:
            return str(data["name"])
        return None

    async def _fetch_meters(self, property_id: int) -> list[dict[str, Any]]:
        data = await self._get_json(f"properties/{property_id}/electricity-meters", [])
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, dict)]

    async def _fetch_active_tariff(self, property_id: int, on_date: date) -> dict[str, Any] | None:
        data = await self._get_json(
            f"properties/{property_id}/grid-tariffs",
            None,
            params={"date": on_date.isoformat()},
        )
        return data if isinstance(data, dict) else None

    async def _fetch_readings(self, property_id: int, start: date, end: date | None) -> Any:
        params = {"startDate": start.isoformat()}
        if end is not None:
            params["endDate"] = end.isoformat()
        return await self._get_json(
            f"properties/{property_id}/electricity-readings", [], params=params
        )

    async def load_snapshot(self, property_id: int, today: date | None = None) -> DashboardSnapshot:
        """Fetch all dashboard slices concurrently.

        The requests have no ordering dependency and no retries; each one
        that fails contributes an empty value.
        """
        today = today or date.today()
        windows = analytics.reading_windows(today)

        property_name, meters, tariff, *reading_payloads = await asyncio.gather(
            self._fetch_property_name(property_id),
            self._fetch_meters(property_id),
            self._fetch_active_tariff(property_id, today),
            *(self._fetch_readings(property_id, start, end) for start, end in windows.values()),
        )

        readings = ReadingSnapshot(
            **{
                name: rows_from_raw(payload)
                for name, payload in zip(windows, reading_payloads, strict=True)
            }
        )
        return DashboardSnapshot(
            property_name=property_name,
            meters=meters,
            active_tariff=tariff,
            readings=readings,
        )

    async def load_dashboard(
        self,
        property_id: int,
        trend_days: int | None = None,
        meter_id: str | None = None,
        today: date | None = None,
    ) -> Dashboard:
        """Fetch a snapshot and compute its analytics."""
        today = today or date.today()
        days = analytics.parse_trend_days(trend_days or settings.DEFAULT_TREND_DAYS)
        snapshot = await self.load_snapshot(property_id, today)
        result = analytics.aggregate(
            snapshot.readings,
            to_decimal(snapshot.active_tariff_rate),
            trend_days=days,
            today=today,
            meter_id=meter_id,
        )
        return Dashboard(snapshot=snapshot, analytics=result)

    def export_url(
        self,
        property_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> str:
        """URL of the CSV export for a date range, for opening in a browser."""
        params = {}
        if start_date:
            params["startDate"] = start_date.isoformat()
        if end_date:
            params["endDate"] = end_date.isoformat()
        url = self._client.base_url.join(f"properties/{property_id}/electricity-export")
        if params:
            url = url.copy_merge_params(params)
        return str(url)
