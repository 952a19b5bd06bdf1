"""
Dashboard Metrics Tests
"""

import pytest
from datetime import date
from decimal import Decimal
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))

from expenses import Expense
from invoicing import Invoice
from metrics import cash_runway_days, compute_dashboard_metrics, month_window, monthly_trend
from metrics.dashboard import change_percent, direction, round_half_up


@pytest.fixture
def invoices(sample_invoice_rows):
    return [Invoice.from_row(r) for r in sample_invoice_rows]


@pytest.fixture
def expenses(sample_expense_rows):
    return [Expense.from_row(r) for r in sample_expense_rows]


class TestMonthWindow:
    """Tests for the trailing month window."""

    def test_crosses_year_boundary(self):
        window = month_window(date(2025, 2, 14))
        assert window == [(2024, 9), (2024, 10), (2024, 11), (2024, 12), (2025, 1), (2025, 2)]

    def test_ends_at_current_month(self):
        assert month_window(date(2025, 12, 31))[-1] == (2025, 12)


class TestMonthlyTrend:
    """Tests for earned/spent bucketing."""

    def test_buckets(self, invoices, expenses):
        trend = monthly_trend(invoices, expenses, today=date(2025, 1, 31))

        assert len(trend) == 6
        assert [p.name for p in trend] == ["Aug", "Sep", "Oct", "Nov", "Dec", "Jan"]

        latest = trend[-1]
        # Draft invoice excluded
        assert latest.earned == Decimal("2000.00")
        assert latest.spent == Decimal("500.00")
        assert all(p.earned == 0 and p.spent == 0 for p in trend[:-1])

    def test_rows_outside_window_ignored(self, invoices, expenses):
        trend = monthly_trend(invoices, expenses, today=date(2025, 9, 1))
        assert sum(p.earned for p in trend) == 0
        assert sum(p.spent for p in trend) == 0

    def test_undated_rows_skipped(self):
        today = date(2025, 1, 31)
        invoices = [Invoice.from_row({"id": "i1", "customer": "Acme", "status": "paid", "total": 900})]
        expenses = [Expense.from_row({"id": "e1", "vendor": "AWS", "amount": 40})]

        trend = monthly_trend(invoices, expenses, today=today)

        assert sum(p.earned for p in trend) == 0
        assert sum(p.spent for p in trend) == 0

    def test_to_dict(self, invoices, expenses):
        point = monthly_trend(invoices, expenses, today=date(2025, 1, 31))[-1]
        assert point.to_dict() == {"name": "Jan", "month": "2025-01", "earned": 2000.0, "spent": 500.0}


class TestCashRunway:
    """Tests for the runway estimate."""

    @pytest.mark.parametrize("earned,spent,expected", [
        ("0", "0", 300),
        ("3000", "1500", 130),
        ("1000", "3000", 30),
        ("0", "9000", 30),
        ("610", "600", 251),
    ])
    def test_runway(self, earned, spent, expected):
        assert cash_runway_days(Decimal(earned), Decimal(spent)) == expected

    def test_round_half_up(self):
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("-2.5")) == -2
        assert round_half_up(Decimal("2.49")) == 2


class TestChanges:
    """Tests for month-over-month deltas."""

    def test_change_percent(self):
        assert change_percent(Decimal("150"), Decimal("100")) == 50.0
        assert change_percent(Decimal("50"), Decimal("150")) == -66.7
        assert change_percent(Decimal("-50"), Decimal("-100")) == 50.0

    def test_zero_previous(self):
        assert change_percent(Decimal("100"), Decimal("0")) == 0.0

    def test_direction(self):
        assert direction(1.5) == "up"
        assert direction(-0.1) == "down"
        assert direction(0.0) == "neutral"


class TestComputeDashboardMetrics:
    """Tests for the combined dashboard metrics."""

    def test_metrics(self, invoices, expenses):
        metrics = compute_dashboard_metrics(invoices, expenses, today=date(2025, 1, 31))
        data = metrics.to_dict()

        assert data["earned_this_month"] == 2000.0
        assert data["spent_this_month"] == 500.0
        assert data["cash_runway_days"] == 390
        assert [k["label"] for k in data["kpis"]] == ["Earned", "Spent", "Net"]
        assert data["kpis"][2]["value"] == 1500.0
        assert data["kpis"][0]["change_direction"] == "neutral"

    def test_empty(self):
        metrics = compute_dashboard_metrics([], [], today=date(2025, 1, 31))

        assert metrics.latest.earned == 0
        assert metrics.cash_runway_days == 300
        assert all(c.change_percent == 0.0 for c in metrics.changes)
