"""
Dashboard aggregation engine.

Consumes a date-filtered list of shipment records and produces the KPI
summary plus the per-truck, per-consignor and per-day breakdowns that feed
the dashboard charts. Revenue for a shipment is `freight + delivery_charge`.
"""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from fleetbook.services.date_range import DateRange, resolve_date_range
from fleetbook.services.filtering import filter_by_date_range
from fleetbook.services.freight import ZERO, quantize_money
from fleetbook.services.records import ShipmentRecord, to_records

UNKNOWN_CONSIGNOR = "Unknown"

T = TypeVar("T")
A = TypeVar("A")


def group_and_reduce(
    items: Iterable[T],
    key: Callable[[T], Hashable],
    initial: Callable[[], A],
    reduce: Callable[[A, T], A],
) -> "OrderedDict[Hashable, A]":
    """Group items by `key` and fold each group with `reduce`.

    Groups come back in first-encounter order.
    """
    groups: "OrderedDict[Hashable, A]" = OrderedDict()
    for item in items:
        group_key = key(item)
        acc = groups[group_key] if group_key in groups else initial()
        groups[group_key] = reduce(acc, item)
    return groups


@dataclass
class GroupTotals:
    trips: int = 0
    revenue: Decimal = ZERO


def _add_trip(totals: GroupTotals, record: ShipmentRecord) -> GroupTotals:
    totals.trips += 1
    totals.revenue += record.revenue
    return totals


def consignor_key(record: ShipmentRecord) -> str:
    return record.consignor or UNKNOWN_CONSIGNOR


def _money(value: Decimal) -> float:
    return float(quantize_money(value))


@dataclass(frozen=True)
class TruckBreakdown:
    truck: str
    trips: int
    revenue: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"truck": self.truck, "trips": self.trips, "revenue": _money(self.revenue)}


@dataclass(frozen=True)
class ConsignorBreakdown:
    consignor: str
    revenue: Decimal
    trips: int

    def to_dict(self) -> Dict[str, Any]:
        return {"consignor": self.consignor, "revenue": _money(self.revenue), "trips": self.trips}


@dataclass(frozen=True)
class DailyBreakdown:
    date: str
    revenue: Decimal
    trips: int

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "revenue": _money(self.revenue), "trips": self.trips}


@dataclass(frozen=True)
class DashboardSummary:
    total_trips: int = 0
    total_revenue: Decimal = ZERO
    total_weight: Decimal = ZERO
    average_weight: Decimal = ZERO
    unique_trucks: int = 0
    unique_consignors: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_trips": self.total_trips,
            "total_revenue": _money(self.total_revenue),
            "total_weight": _money(self.total_weight),
            "average_weight": _money(self.average_weight),
            "unique_trucks": self.unique_trucks,
            "unique_consignors": self.unique_consignors,
        }


@dataclass(frozen=True)
class DashboardMetrics:
    summary: DashboardSummary = field(default_factory=DashboardSummary)
    per_truck: List[TruckBreakdown] = field(default_factory=list)
    per_consignor: List[ConsignorBreakdown] = field(default_factory=list)
    per_day: List[DailyBreakdown] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "per_truck": [row.to_dict() for row in self.per_truck],
            "per_consignor": [row.to_dict() for row in self.per_consignor],
            "per_day": [row.to_dict() for row in self.per_day],
        }


@dataclass(frozen=True)
class DashboardResult:
    date_range: DateRange
    metrics: DashboardMetrics

    def to_dict(self) -> Dict[str, Any]:
        return {"date_range": self.date_range.to_dict(), **self.metrics.to_dict()}


def compute_summary(records: List[ShipmentRecord]) -> DashboardSummary:
    total_trips = len(records)
    if total_trips == 0:
        return DashboardSummary()

    total_revenue = sum((r.revenue for r in records), ZERO)
    total_weight = sum((r.weight for r in records), ZERO)
    return DashboardSummary(
        total_trips=total_trips,
        total_revenue=total_revenue,
        total_weight=total_weight,
        average_weight=total_weight / total_trips,
        unique_trucks=len({r.truck_number for r in records}),
        unique_consignors=len({consignor_key(r) for r in records}),
    )


def trips_per_truck(records: Iterable[ShipmentRecord]) -> List[TruckBreakdown]:
    groups = group_and_reduce(records, lambda r: r.truck_number, GroupTotals, _add_trip)
    rows = [TruckBreakdown(truck=k, trips=v.trips, revenue=v.revenue) for k, v in groups.items()]
    return sorted(rows, key=lambda row: row.trips, reverse=True)


def revenue_per_consignor(records: Iterable[ShipmentRecord]) -> List[ConsignorBreakdown]:
    groups = group_and_reduce(records, consignor_key, GroupTotals, _add_trip)
    rows = [ConsignorBreakdown(consignor=k, revenue=v.revenue, trips=v.trips) for k, v in groups.items()]
    return sorted(rows, key=lambda row: row.revenue, reverse=True)


def revenue_per_day(records: Iterable[ShipmentRecord]) -> List[DailyBreakdown]:
    dated = (r for r in records if r.date is not None)
    groups = group_and_reduce(dated, lambda r: r.day_key, GroupTotals, _add_trip)
    rows = [DailyBreakdown(date=k, revenue=v.revenue, trips=v.trips) for k, v in groups.items()]
    # YYYY-MM-DD keys sort chronologically
    return sorted(rows, key=lambda row: row.date)


def aggregate_shipments(shipments: Iterable[Any]) -> DashboardMetrics:
    records = to_records(shipments)
    return DashboardMetrics(
        summary=compute_summary(records),
        per_truck=trips_per_truck(records),
        per_consignor=revenue_per_consignor(records),
        per_day=revenue_per_day(records),
    )


def build_dashboard(
    shipments: Iterable[Any],
    period: Any = "current_month",
    start: Any = None,
    end: Any = None,
    now: Optional[datetime] = None,
) -> DashboardResult:
    """Resolve the period, narrow the shipments to it and aggregate."""
    date_range = resolve_date_range(period, start, end, now=now)
    in_range = filter_by_date_range(to_records(shipments), date_range)
    return DashboardResult(date_range=date_range, metrics=aggregate_shipments(in_range))
