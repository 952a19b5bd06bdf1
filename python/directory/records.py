"""
Directory Records Module

Payload shaping for customer, vendor and inventory rows.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


class DirectoryError(ValueError):
    """Raised for invalid directory records."""


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


@dataclass
class ContactRecord:
    """Customer or vendor contact details."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None

    def to_record(self, created_by: str | None = None) -> dict:
        """Column values; blank strings are stored as null."""
        record = {
            "name": blank_to_none(self.name),
            "email": blank_to_none(self.email),
            "phone": blank_to_none(self.phone),
            "address": blank_to_none(self.address),
        }
        if created_by is not None:
            record["created_by"] = created_by
        return record


@dataclass
class InventoryRecord:
    """Inventory item; stock defaults to 0 and price may be unset."""

    name: str
    sku: str | None = None
    price: Any = None
    stock: Any = 0
    description: str | None = None

    def _price(self) -> Decimal | None:
        if self.price is None or self.price == "":
            return None
        try:
            return Decimal(str(self.price))
        except InvalidOperation:
            raise DirectoryError(f"Invalid price: {self.price!r}")

    def _stock(self) -> int:
        try:
            return int(self.stock or 0)
        except (TypeError, ValueError):
            return 0

    def to_record(self, created_by: str | None = None) -> dict:
        name = (self.name or "").strip()
        if not name:
            raise DirectoryError("Name is required")

        record = {
            "name": name,
            "sku": blank_to_none(self.sku),
            "price": self._price(),
            "stock": self._stock(),
            "description": blank_to_none(self.description),
        }
        if created_by is not None:
            record["created_by"] = created_by
        return record
