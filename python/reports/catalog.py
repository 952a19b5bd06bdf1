"""
Report Catalog Module

Report definitions and per-user report access resolution.
"""

from dataclasses import dataclass
from typing import Iterable

from .builder import ReportType


@dataclass(frozen=True)
class ReportDefinition:
    key: str
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"key": self.key, "title": self.title, "description": self.description}


REPORT_DEFINITIONS: dict[str, ReportDefinition] = {
    d.key: d
    for d in (
        ReportDefinition(ReportType.PROFIT_LOSS.value, "Profit & Loss",
                         "Invoices and expenses in the range with revenue, expenses and profit"),
        ReportDefinition(ReportType.CASHFLOW.value, "Cash flow",
                         "Chronological inflows and outflows with a running balance"),
        ReportDefinition(ReportType.SALES_BY_CUSTOMER.value, "Sales by customer",
                         "Invoice totals and counts grouped by customer"),
        ReportDefinition(ReportType.EXPENSES_BY_VENDOR.value, "Expenses by vendor",
                         "Expense totals and counts grouped by vendor"),
        ReportDefinition(ReportType.CUSTOM.value, "Custom report",
                         "Build grouped/aggregated reports"),
    )
}


def allowed_report_keys(
    is_admin: bool,
    role_reports: Iterable[str],
    granted: Iterable[str] = (),
) -> list[str]:
    """Report keys a user may run, in catalog order.

    Admins and roles configured with "*" get every report; everyone else
    gets their role's reports plus explicit grants.
    """
    role_reports = set(role_reports)
    if is_admin or "*" in role_reports:
        return list(REPORT_DEFINITIONS)

    allowed = role_reports | set(granted)
    return [key for key in REPORT_DEFINITIONS if key in allowed]


def is_known_report(key: str) -> bool:
    return key in REPORT_DEFINITIONS
