"""
Unit Tests for the dashboard aggregation engine.

Revenue per shipment is freight + delivery_charge.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from fleetbook.services.aggregation import (
    UNKNOWN_CONSIGNOR,
    aggregate_shipments,
    build_dashboard,
    group_and_reduce,
)
from tests.builders import make_record


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fleet_week():
    """TRK1 makes two trips worth 150 each, TRK2 one trip worth 200."""
    return [
        make_record(id=1, truck_number="TRK1", consignor="Acme", freight=Decimal("100"),
                    delivery_charge=Decimal("50"), weight=Decimal("1000"),
                    date=datetime(2024, 2, 12, 8)),
        make_record(id=2, truck_number="TRK2", consignor="Bolt", freight=Decimal("200"),
                    weight=Decimal("3000"), date=datetime(2024, 2, 12, 17)),
        make_record(id=3, truck_number="TRK1", consignor="Acme", freight=Decimal("100"),
                    delivery_charge=Decimal("50"), weight=Decimal("2000"),
                    date=datetime(2024, 2, 11, 9)),
    ]


# =============================================================================
# SUMMARY
# =============================================================================

class TestSummary:

    def test_totals(self, fleet_week):
        summary = aggregate_shipments(fleet_week).summary
        assert summary.total_trips == 3
        assert summary.total_revenue == Decimal("500")
        assert summary.total_weight == Decimal("6000")
        assert summary.average_weight == Decimal("2000")
        assert summary.unique_trucks == 2
        assert summary.unique_consignors == 2

    def test_empty_input_is_all_zero(self):
        metrics = aggregate_shipments([])
        assert metrics.summary.total_trips == 0
        assert metrics.summary.average_weight == Decimal("0")
        assert metrics.per_truck == []
        assert metrics.per_consignor == []
        assert metrics.per_day == []

    def test_malformed_amounts_count_as_zero(self):
        metrics = aggregate_shipments([
            {"id": 1, "date": "2024-02-01", "truck_number": "TRK1", "freight": "oops", "weight": None},
            {"id": 2, "date": "2024-02-01", "truck_number": "TRK1", "freight": "10", "weight": "5"},
        ])
        assert metrics.summary.total_revenue == Decimal("10")
        assert metrics.summary.total_weight == Decimal("5")

    def test_huge_amounts_still_serialise(self):
        metrics = aggregate_shipments([make_record(id=1, freight=Decimal("1e30"))])
        assert metrics.summary.to_dict()["total_revenue"] == 1e30
        assert metrics.per_truck[0].to_dict()["revenue"] == 1e30


# =============================================================================
# BREAKDOWNS
# =============================================================================

class TestBreakdowns:

    def test_per_truck(self, fleet_week):
        rows = [row.to_dict() for row in aggregate_shipments(fleet_week).per_truck]
        assert rows == [
            {"truck": "TRK1", "trips": 2, "revenue": 300.0},
            {"truck": "TRK2", "trips": 1, "revenue": 200.0},
        ]

    def test_per_truck_ties_keep_first_seen_order(self):
        records = [make_record(id=1, truck_number="B"), make_record(id=2, truck_number="A")]
        assert [row.truck for row in aggregate_shipments(records).per_truck] == ["B", "A"]

    def test_per_consignor_sorted_by_revenue(self, fleet_week):
        rows = aggregate_shipments(fleet_week).per_consignor
        assert [(row.consignor, row.revenue, row.trips) for row in rows] == [
            ("Acme", Decimal("300"), 2),
            ("Bolt", Decimal("200"), 1),
        ]

    def test_blank_consignor_is_unknown_bucket(self):
        records = [make_record(id=1, consignor=""), make_record(id=2, consignor="  ")]
        metrics = aggregate_shipments(records)
        assert [row.consignor for row in metrics.per_consignor] == [UNKNOWN_CONSIGNOR]
        assert metrics.summary.unique_consignors == 1

    def test_per_day_ascending(self, fleet_week):
        rows = [row.to_dict() for row in aggregate_shipments(fleet_week).per_day]
        assert rows == [
            {"date": "2024-02-11", "revenue": 150.0, "trips": 1},
            {"date": "2024-02-12", "revenue": 350.0, "trips": 2},
        ]

    def test_undated_records_skip_daily_series(self):
        metrics = aggregate_shipments([make_record(id=1, date=None)])
        assert metrics.summary.total_trips == 1
        assert metrics.per_day == []

    def test_breakdowns_add_up_to_summary(self, fleet_week):
        metrics = aggregate_shipments(fleet_week)
        total = metrics.summary.total_revenue
        assert sum(row.trips for row in metrics.per_truck) == metrics.summary.total_trips
        assert sum((row.revenue for row in metrics.per_truck), Decimal("0")) == total
        assert sum((row.revenue for row in metrics.per_consignor), Decimal("0")) == total
        assert sum((row.revenue for row in metrics.per_day), Decimal("0")) == total
        assert len(metrics.per_truck) == metrics.summary.unique_trucks
        assert len(metrics.per_consignor) == metrics.summary.unique_consignors


class TestGroupAndReduce:

    def test_first_encounter_order(self):
        groups = group_and_reduce(["b", "a", "b", "c"], lambda s: s, int, lambda acc, _: acc + 1)
        assert list(groups.items()) == [("b", 2), ("a", 1), ("c", 1)]


# =============================================================================
# DASHBOARD
# =============================================================================

class TestBuildDashboard:

    def test_period_narrows_shipments(self, fleet_week):
        result = build_dashboard(fleet_week, "custom", "2024-02-12", "2024-02-12")
        assert result.metrics.summary.total_trips == 2
        assert result.date_range.label == "Feb 12, 2024 - Feb 12, 2024"

    def test_to_dict_shape(self, fleet_week):
        data = build_dashboard(fleet_week, "current_week", now=datetime(2024, 2, 14)).to_dict()
        assert set(data) == {"date_range", "summary", "per_truck", "per_consignor", "per_day"}
        # Sunday Feb 11 falls in the previous week
        assert data["summary"]["total_trips"] == 2
        assert data["summary"]["total_revenue"] == 350.0
