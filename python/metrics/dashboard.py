"""
Dashboard Metrics Module

Aggregates invoices and expenses into monthly earned/spent trends, the
current month's KPIs, and the cash runway estimate.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from expenses.models import Expense
from invoicing.models import Invoice, InvoiceStatus

logger = logging.getLogger(__name__)

TREND_MONTHS = 6
RUNWAY_FLOOR_DAYS = 30
RUNWAY_CASH_BUFFER = Decimal("5000")
RUNWAY_MIN_MONTHLY_SPEND = Decimal("500")


@dataclass
class MonthlyPoint:
    """Earned and spent totals for one calendar month."""

    year: int
    month: int
    earned: Decimal = Decimal("0")
    spent: Decimal = Decimal("0")

    @property
    def name(self) -> str:
        return date(self.year, self.month, 1).strftime("%b")

    @property
    def key(self) -> str:
        return f"{self.year}-{self.month:02d}"

    @property
    def net(self) -> Decimal:
        return self.earned - self.spent

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "month": self.key,
            "earned": float(self.earned),
            "spent": float(self.spent),
        }


@dataclass
class MetricChange:
    """Month-over-month change of one metric."""

    label: str
    value: Decimal
    previous: Decimal
    change_percent: float
    change_direction: str  # 'up', 'down', 'neutral'

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "value": float(self.value),
            "formatted_value": f"${self.value:,.2f}",
            "previous": float(self.previous),
            "change_percent": self.change_percent,
            "change_direction": self.change_direction,
        }


@dataclass
class DashboardMetrics:
    """Everything the dashboard page shows."""

    trend: list[MonthlyPoint] = field(default_factory=list)
    cash_runway_days: int = RUNWAY_FLOOR_DAYS
    changes: list[MetricChange] = field(default_factory=list)

    @property
    def latest(self) -> MonthlyPoint | None:
        return self.trend[-1] if self.trend else None

    def to_dict(self) -> dict:
        latest = self.latest
        return {
            "earned_this_month": float(latest.earned) if latest else 0.0,
            "spent_this_month": float(latest.spent) if latest else 0.0,
            "cash_runway_days": self.cash_runway_days,
            "trend": [p.to_dict() for p in self.trend],
            "kpis": [c.to_dict() for c in self.changes],
        }


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_window(today: date, months: int = TREND_MONTHS) -> list[tuple[int, int]]:
    """(year, month) pairs for the trailing window ending at today's month."""
    return [_shift_month(today.year, today.month, -(months - 1 - i)) for i in range(months)]


def round_half_up(value: Decimal | float) -> int:
    """Round .5 upward, matching the chart's display rounding."""
    return math.floor(Decimal(str(value)) + Decimal("0.5"))


def cash_runway_days(earned: Decimal, spent: Decimal) -> int:
    """Estimate days of runway from one month of earned/spent.

    Net cash plus a fixed buffer, divided by daily spend (with a minimum
    monthly spend), never reported below the floor.
    """
    daily_spend = max(spent, RUNWAY_MIN_MONTHLY_SPEND) / 30
    days = round_half_up((earned - spent + RUNWAY_CASH_BUFFER) / daily_spend)
    return max(RUNWAY_FLOOR_DAYS, days)


def change_percent(current: Decimal, previous: Decimal) -> float:
    if previous == 0:
        return 0.0
    return round(float((current - previous) / abs(previous) * 100), 1)


def direction(change: float) -> str:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "neutral"


def monthly_trend(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
    today: date | None = None,
    months: int = TREND_MONTHS,
) -> list[MonthlyPoint]:
    """Bucket non-draft invoice totals and expense amounts by month.

    Undated rows are left out.

    Args:
        invoices: Invoices (drafts are ignored)
        expenses: Expenses
        today: Reference date (defaults to today)
        months: Window length

    Returns:
        One MonthlyPoint per month, oldest first
    """
    today = today or date.today()
    points = {
        (y, m): MonthlyPoint(year=y, month=m)
        for y, m in month_window(today, months)
    }

    for invoice in invoices:
        if invoice.status == InvoiceStatus.DRAFT or invoice.issue_date is None:
            continue
        point = points.get((invoice.issue_date.year, invoice.issue_date.month))
        if point:
            point.earned += invoice.total

    for expense in expenses:
        if expense.date is None:
            continue
        point = points.get((expense.date.year, expense.date.month))
        if point:
            point.spent += expense.amount

    return list(points.values())


def compute_dashboard_metrics(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
    today: date | None = None,
) -> DashboardMetrics:
    """Build the dashboard's derived metrics.

    Args:
        invoices: All visible invoices
        expenses: All visible expenses
        today: Reference date (defaults to today)

    Returns:
        DashboardMetrics
    """
    trend = monthly_trend(invoices, expenses, today)
    latest = trend[-1] if trend else MonthlyPoint(year=0, month=1)
    previous = trend[-2] if len(trend) > 1 else MonthlyPoint(year=0, month=1)

    changes = []
    for label, cur, prev in (
        ("Earned", latest.earned, previous.earned),
        ("Spent", latest.spent, previous.spent),
        ("Net", latest.net, previous.net),
    ):
        pct = change_percent(cur, prev)
        changes.append(MetricChange(
            label=label,
            value=cur,
            previous=prev,
            change_percent=pct,
            change_direction=direction(pct),
        ))

    runway = cash_runway_days(latest.earned, latest.spent)
    logger.debug(f"Dashboard metrics: earned={latest.earned} spent={latest.spent} runway={runway}")

    return DashboardMetrics(trend=trend, cash_runway_days=runway, changes=changes)
