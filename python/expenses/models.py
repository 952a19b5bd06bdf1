"""
Expense Models Module
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from invoicing.models import to_date, to_decimal


@dataclass
class Expense:
    """A recorded business expense."""

    date: date | None
    vendor: str
    amount: Decimal
    category: str = "General"
    note: str = ""
    receipt_url: str | None = None
    id: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

    def __post_init__(self):
        self.amount = to_decimal(self.amount)

    @property
    def is_valid(self) -> bool:
        return bool(self.vendor.strip()) and self.amount.is_finite() and self.amount > 0

    def to_record(self) -> dict:
        """Column values for an insert."""
        return {
            "date": self.date,
            "vendor": self.vendor,
            "amount": self.amount,
            "category": self.category,
            "note": self.note or None,
            "receipt_url": self.receipt_url,
            "created_by": self.created_by,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "vendor": self.vendor,
            "amount": float(self.amount),
            "category": self.category,
            "note": self.note,
            "receipt_url": self.receipt_url,
            "created_by": self.created_by,
        }

    @classmethod
    def from_row(cls, row: dict) -> "Expense":
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            date=to_date(row.get("date") or row.get("expense_date")),
            vendor=row.get("vendor") or row.get("payee") or "",
            amount=row.get("amount", 0),
            category=row.get("category") or "General",
            note=row.get("note") or "",
            receipt_url=row.get("receipt_url"),
            created_by=str(row["created_by"]) if row.get("created_by") else None,
            created_at=row.get("created_at"),
        )
