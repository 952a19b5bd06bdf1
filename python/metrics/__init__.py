"""
Metrics Module

Derived dashboard metrics computed from fetched invoices and expenses.
"""

from .dashboard import (
    DashboardMetrics,
    MetricChange,
    MonthlyPoint,
    cash_runway_days,
    compute_dashboard_metrics,
    month_window,
    monthly_trend,
)

__all__ = [
    "DashboardMetrics",
    "MetricChange",
    "MonthlyPoint",
    "cash_runway_days",
    "compute_dashboard_metrics",
    "month_window",
    "monthly_trend",
]
