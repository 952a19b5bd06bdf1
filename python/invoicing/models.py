"""
Invoice Models Module

Invoice and line item records with their status transitions.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_DUE_DAYS = 7


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


class InvoiceError(ValueError):
    """Raised for invalid invoice data or transitions."""


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Convert loosely typed numeric input to Decimal."""
    if value is None or value == "":
        return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def to_date(value: Any) -> date | None:
    """Parse a date, datetime or ISO string (time part ignored)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


@dataclass
class InvoiceItem:
    """Single invoice line."""

    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")

    def __post_init__(self):
        self.quantity = to_decimal(self.quantity)
        self.unit_price = to_decimal(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "quantity": float(self.quantity),
            "unit_price": float(self.unit_price),
            "line_total": float(self.line_total),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "InvoiceItem":
        return cls(
            description=data.get("description") or "",
            quantity=data.get("quantity", 1),
            unit_price=data.get("unit_price", data.get("unitPrice", 0)),
        )


def default_items() -> list[InvoiceItem]:
    """Starting line for a new invoice."""
    return [InvoiceItem(description="Service", quantity=Decimal("1"), unit_price=Decimal("100"))]


@dataclass
class Invoice:
    """Invoice with its line items.

    When line items are present the total is always their sum; a stored
    total is only kept for rows that carry no items.
    """

    customer: str
    issue_date: date | None
    due_date: date | None
    items: list[InvoiceItem] = field(default_factory=list)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    total: Decimal = Decimal("0")
    id: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

    def __post_init__(self):
        self.status = InvoiceStatus(self.status)
        if self.items:
            self.total = self.compute_total()
        else:
            self.total = to_decimal(self.total)

    def compute_total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def can_send(self) -> bool:
        return self.status != InvoiceStatus.PAID

    def send(self) -> None:
        """Mark the invoice as sent."""
        if not self.can_send:
            raise InvoiceError("A paid invoice cannot be sent again")
        self.status = InvoiceStatus.SENT

    def mark_paid(self) -> None:
        self.status = InvoiceStatus.PAID

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer": self.customer,
            "issue_date": self.issue_date.isoformat() if self.issue_date else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "items": [item.to_dict() for item in self.items],
            "status": self.status.value,
            "total": float(self.total),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row: dict, items: list[dict] | None = None) -> "Invoice":
        """Build an invoice from a database row and its item rows.

        A missing or unparsable issue date stays None.
        """
        issue = to_date(row.get("issue_date") or row.get("issuedate"))
        due = to_date(row.get("due_date") or row.get("duedate"))
        if due is None and issue is not None:
            due = issue + timedelta(days=DEFAULT_DUE_DAYS)
        status = row.get("status") or InvoiceStatus.DRAFT.value
        if status not in {s.value for s in InvoiceStatus}:
            logger.warning(f"Unknown invoice status {status!r} on {row.get('id')}, treating as draft")
            status = InvoiceStatus.DRAFT.value

        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            customer=row.get("customer") or row.get("customer_name") or "",
            issue_date=issue,
            due_date=due,
            items=[InvoiceItem.from_dict(i) for i in (items or [])],
            status=InvoiceStatus(status),
            total=row.get("total", 0),
            created_by=str(row["created_by"]) if row.get("created_by") else None,
            created_at=row.get("created_at"),
        )


def new_invoice(
    customer: str,
    issue_date: date | None = None,
    due_date: date | None = None,
    items: list[InvoiceItem] | None = None,
    created_by: str | None = None,
) -> Invoice:
    """Create a draft invoice, filling the form defaults.

    Args:
        customer: Customer name
        issue_date: Defaults to today
        due_date: Defaults to issue date + 7 days
        items: Defaults to a single "Service" line at 100
        created_by: Owner user id

    Returns:
        Draft Invoice
    """
    customer = (customer or "").strip()
    if not customer:
        raise InvoiceError("Customer is required")

    issue = issue_date or date.today()
    due = due_date or issue + timedelta(days=DEFAULT_DUE_DAYS)
    if due < issue:
        raise InvoiceError("Due date cannot be before issue date")

    lines = list(items) if items else default_items()
    for line in lines:
        if line.quantity < 0 or line.unit_price < 0:
            raise InvoiceError("Quantity and unit price must not be negative")

    return Invoice(
        customer=customer,
        issue_date=issue,
        due_date=due,
        items=lines,
        status=InvoiceStatus.DRAFT,
        created_by=created_by,
    )
