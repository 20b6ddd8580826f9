"""Electricity analytics: cost/unit rollups, daily averages and trend series.

Everything here is a pure function of already-fetched rows and a tariff
rate. Nothing raises on bad data; unusable numbers count as zero.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from decimal import ROUND_FLOOR, Decimal
from typing import Any

from powerdesk.schemas.analytics import (
    AggregationResult,
    MeterShare,
    ReadingAlert,
    ReadingRow,
    ReadingSnapshot,
    TrendPoint,
    WindowTotals,
    to_decimal,
)

TREND_WINDOWS = (7, 30)
ALERT_STATUSES = ("warning", "critical")
ALERT_LIMIT = 5

ZERO = Decimal("0")
HALF = Decimal("0.5")


def reading_windows(today: date) -> dict[str, tuple[date, date | None]]:
    """Date ranges (start, end inclusive; open end = up to now) per window."""
    month_start = today.replace(day=1)
    previous_end = month_start - timedelta(days=1)
    return {
        "today": (today, today),
        "month": (month_start, None),
        "previous_month": (previous_end.replace(day=1), previous_end),
        "trend": (today - timedelta(days=max(TREND_WINDOWS)), None),
    }


def parse_trend_days(value: Any) -> int:
    """Validate a requested trend window size."""
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"trend window must be one of {TREND_WINDOWS}") from None
    if days not in TREND_WINDOWS:
        raise ValueError(f"trend window must be one of {TREND_WINDOWS}")
    return days


def effective_units(row: ReadingRow) -> Decimal:
    """Billed units: final units if recorded, else raw computed units."""
    if row.final_units is not None:
        return row.final_units
    if row.computed_units is not None:
        return row.computed_units
    return ZERO


def effective_cost(row: ReadingRow, active_tariff_rate: Decimal) -> Decimal:
    """Stored cost, or units times the active rate when none was stored.

    Readings logged before any tariff existed carry a zero cost.
    """
    if row.computed_cost:
        return row.computed_cost
    return effective_units(row) * active_tariff_rate


def summarize(rows: Iterable[ReadingRow], active_tariff_rate: Decimal) -> WindowTotals:
    """Sum effective cost and units over rows."""
    cost = ZERO
    units = ZERO
    for row in rows:
        cost += effective_cost(row, active_tariff_rate)
        units += effective_units(row)
    return WindowTotals(cost=cost, units=units)


def filter_meter(rows: Iterable[ReadingRow], meter_id: str | None) -> list[ReadingRow]:
    """Restrict rows to one meter; ``None`` keeps the combined view."""
    if meter_id is None:
        return list(rows)
    return [row for row in rows if row.meter_id == meter_id]


def daily_averages(month_rows: Sequence[ReadingRow], month_totals: WindowTotals) -> WindowTotals:
    """Average per logged day.

    The divisor is the number of distinct reading dates present, not the
    calendar days elapsed, and is 1 when there are no readings.
    """
    days_logged = len({row.reading_date for row in month_rows}) or 1
    return WindowTotals(
        cost=month_totals.cost / days_logged,
        units=month_totals.units / days_logged,
    )


def build_trend(
    rows: Iterable[ReadingRow],
    active_tariff_rate: Decimal,
    days: int,
    today: date,
) -> list[TrendPoint]:
    """Daily totals for the ``days`` dates ending at ``today``, oldest first.

    Rows are matched on exact ISO date string. Days without readings get a
    zero point so the series always has exactly ``days`` entries.
    """
    buckets: dict[str, list[ReadingRow]] = defaultdict(list)
    for row in rows:
        buckets[row.reading_date].append(row)

    points: list[TrendPoint] = []
    for offset in range(max(days, 0) - 1, -1, -1):
        day = today - timedelta(days=offset)
        totals = summarize(buckets.get(day.isoformat(), []), active_tariff_rate)
        points.append(TrendPoint(date=day, cost=totals.cost, units=totals.units))
    return points


def round_whole(value: Decimal) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int((value + HALF).to_integral_value(rounding=ROUND_FLOOR))


def percent_change(current: Decimal, baseline: Decimal) -> int:
    """Whole-percent change from baseline; 0 when there is no baseline."""
    if baseline <= 0:
        return 0
    return round_whole((current - baseline) / baseline * 100)


def meter_breakdown(rows: Iterable[ReadingRow]) -> list[MeterShare]:
    """Per-meter unit totals with share of the whole, largest first."""
    units_by_meter: dict[str | None, Decimal] = {}
    details: dict[str | None, ReadingRow] = {}
    for row in rows:
        units_by_meter[row.meter_id] = units_by_meter.get(row.meter_id, ZERO) + effective_units(row)
        details.setdefault(row.meter_id, row)

    total = sum(units_by_meter.values(), ZERO)
    shares = [
        MeterShare(
            meter_id=meter_id,
            name=details[meter_id].meter_name or "Unknown",
            meter_type=details[meter_id].meter_type,
            units=units,
            percentage=percent_of(units, total),
        )
        for meter_id, units in units_by_meter.items()
    ]
    shares.sort(key=lambda share: share.units, reverse=True)
    return shares


def percent_of(part: Decimal, total: Decimal) -> int:
    """Whole-percent share of a total; 0 for an empty total."""
    if total <= 0:
        return 0
    return round_whole(part / total * 100)


def high_consumption_alerts(month_rows: Iterable[ReadingRow]) -> list[ReadingAlert]:
    """The first few month readings logged as warning or critical, in input order."""
    alerts: list[ReadingAlert] = []
    for row in month_rows:
        if row.alert_status not in ALERT_STATUSES:
            continue
        alerts.append(
            ReadingAlert(
                reading_id=row.reading_id,
                meter_id=row.meter_id,
                meter_name=row.meter_name or "Unknown",
                units=effective_units(row),
                reading_date=row.reading_date,
                severity=row.alert_status,
            )
        )
        if len(alerts) == ALERT_LIMIT:
            break
    return alerts


def aggregate(
    snapshot: ReadingSnapshot,
    active_tariff_rate: Any,
    trend_days: int = 7,
    today: date | None = None,
    meter_id: str | None = None,
) -> AggregationResult:
    """Compute all dashboard figures from a snapshot of the four windows.

    ``active_tariff_rate`` may be any loosely typed number; a missing or
    malformed rate is treated as 0.
    """
    rate = to_decimal(active_tariff_rate) or ZERO
    today = today or date.today()

    today_rows = filter_meter(snapshot.today, meter_id)
    month_rows = filter_meter(snapshot.month, meter_id)
    previous_rows = filter_meter(snapshot.previous_month, meter_id)
    trend_rows = filter_meter(snapshot.trend, meter_id)

    today_totals = summarize(today_rows, rate)
    month_totals = summarize(month_rows, rate)
    previous_totals = summarize(previous_rows, rate)
    averages = daily_averages(month_rows, month_totals)

    return AggregationResult(
        active_tariff_rate=rate,
        meter_id=meter_id,
        today=today_totals,
        month=month_totals,
        previous_month=previous_totals,
        averages=averages,
        month_change_pct=percent_change(month_totals.units, previous_totals.units),
        today_change_pct=percent_change(today_totals.units, Decimal(round_whole(averages.units))),
        trend_days=trend_days,
        trend=build_trend(trend_rows, rate, trend_days, today),
        breakdown=meter_breakdown(month_rows),
        alerts=high_consumption_alerts(month_rows),
    )
