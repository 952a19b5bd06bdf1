"""
Report Input Normalization Module

Maps loosely named invoice/expense rows from the hosted database onto a
uniform shape and applies the report date range.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

DEFAULT_RANGE_DAYS = 30


def _first(row: dict, *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def parse_amount(value: Any) -> Decimal | None:
    """Numeric amount or None when missing/not a number."""
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if amount.is_nan() or amount.is_infinite():
        return None
    return amount


def _amount_or_zero(value: Any) -> Decimal | None:
    # absent means zero; present but non-numeric means unusable
    return Decimal("0") if value is None else parse_amount(value)


def parse_report_date(value: Any) -> date | None:
    """Date of an ISO date/timestamp string, date or datetime; None if unparsable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


@dataclass
class ReportInvoice:
    id: str
    customer: str
    issue_date: date | None
    total: Decimal | None
    status: str

    @property
    def is_draft(self) -> bool:
        return self.status == "draft"


@dataclass
class ReportExpense:
    id: str
    vendor: str
    date: date | None
    amount: Decimal | None


def map_invoice_row(row: dict) -> ReportInvoice:
    return ReportInvoice(
        id=str(row.get("id")),
        customer=_first(row, "customer", "customer_name", "client_name") or "",
        issue_date=parse_report_date(_first(row, "issuedate", "issue_date", "issueDate", "created_at")),
        total=_amount_or_zero(_first(row, "total", "amount")),
        status=row.get("status") or "",
    )


def map_expense_row(row: dict) -> ReportExpense:
    return ReportExpense(
        id=str(row.get("id")),
        vendor=_first(row, "vendor", "payee") or "",
        date=parse_report_date(_first(row, "date", "expense_date", "created_at")),
        amount=_amount_or_zero(_first(row, "amount", "total")),
    )


@dataclass
class DateRange:
    """Inclusive report date range; either bound may be open."""

    start: date | None = None
    end: date | None = None

    @classmethod
    def default(cls, today: date | None = None) -> "DateRange":
        today = today or date.today()
        return cls(start=today - timedelta(days=DEFAULT_RANGE_DAYS), end=today)

    def contains(self, day: date | None) -> bool:
        if day is None:
            return False
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True

    @property
    def label(self) -> str:
        start = self.start.isoformat() if self.start else "All dates"
        end = self.end.isoformat() if self.end else "All dates"
        return f"{start} - {end}"

    @property
    def filename_part(self) -> str:
        start = self.start.isoformat() if self.start else "all"
        end = self.end.isoformat() if self.end else "all"
        return f"{start}-to-{end}"
