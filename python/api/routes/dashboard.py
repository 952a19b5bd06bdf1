"""
Dashboard API Routes

Provides the dashboard's derived metrics.
"""

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from metrics import compute_dashboard_metrics

from ..auth import User, get_current_user
from ..queries import fetch_expenses, fetch_invoices

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class TrendPoint(BaseModel):
    """One month of the cashflow chart."""

    name: str
    month: str
    earned: float
    spent: float


class KPIData(BaseModel):
    """KPI card data."""

    label: str
    value: float
    formatted_value: str
    previous: float
    change_percent: float | None = None
    change_direction: str | None = None  # 'up', 'down', 'neutral'


class DashboardSummary(BaseModel):
    """Complete dashboard summary response."""

    greeting: str
    earned_this_month: float
    spent_this_month: float
    cash_runway_days: int
    trend: list[TrendPoint]
    kpis: list[KPIData]


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    user: User = Depends(get_current_user),
) -> DashboardSummary:
    """Get earned/spent for this month, the 6-month trend and cash runway.

    Args:
        user: Authenticated user

    Returns:
        DashboardSummary
    """
    today = date.today()
    # Only the trend window is needed
    window_start = date(today.year - 1, today.month, 1)

    metrics = compute_dashboard_metrics(
        fetch_invoices(user, start_date=window_start),
        fetch_expenses(user, start_date=window_start),
        today=today,
    )
    data = metrics.to_dict()

    return DashboardSummary(
        greeting=f"Welcome back, {user.email}" if user.email else "Welcome back",
        earned_this_month=data["earned_this_month"],
        spent_this_month=data["spent_this_month"],
        cash_runway_days=data["cash_runway_days"],
        trend=[TrendPoint(**p) for p in data["trend"]],
        kpis=[KPIData(**k) for k in data["kpis"]],
    )
