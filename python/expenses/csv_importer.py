"""
Expense CSV Importer Module

Imports expenses from the downloadable CSV template
(date, vendor, amount, category, note).
"""

import csv
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from io import StringIO

from invoicing.models import to_date

from .models import Expense

logger = logging.getLogger(__name__)

TEMPLATE_HEADERS = ["date", "vendor", "amount", "category", "note"]
TEMPLATE_SAMPLE_ROW = ["2025-01-15", "Staples", "42.50", "Office Supplies", "Printer paper"]


def expense_template_csv() -> str:
    """CSV template offered for download."""
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADERS)
    writer.writerow(TEMPLATE_SAMPLE_ROW)
    return buffer.getvalue()


@dataclass
class ImportResult:
    """Outcome of an expense CSV import."""

    expenses: list[Expense] = field(default_factory=list)
    errors: int = 0
    error_rows: list[int] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return len(self.expenses)

    @property
    def message(self) -> str:
        text = f"Imported {self.imported} expenses"
        if self.errors > 0:
            return f"{text}. {self.errors} rows had errors."
        return f"{text}."

    def to_dict(self) -> dict:
        return {
            "imported": self.imported,
            "errors": self.errors,
            "error_rows": self.error_rows,
            "message": self.message,
        }


class ExpenseCSVImporter:
    """Parses expense CSV uploads."""

    DEFAULT_CATEGORY = "General"

    def __init__(self, today: date | None = None):
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _parse_amount(self, value: str) -> Decimal:
        try:
            amount = Decimal(value.replace(",", "")) if value else Decimal("0")
        except InvalidOperation:
            return Decimal("0")
        return amount if amount.is_finite() else Decimal("0")

    def parse(self, content: str | bytes, created_by: str | None = None) -> ImportResult:
        """Parse CSV content into expenses.

        The first line is the header and is skipped. Blank lines are ignored.
        A row is kept only when it has a vendor and a positive amount.

        Args:
            content: CSV text (bytes are decoded as UTF-8)
            created_by: Owner user id stamped on imported expenses

        Returns:
            ImportResult
        """
        if isinstance(content, bytes):
            content = content.decode("utf-8-sig")

        result = ImportResult()
        reader = csv.reader(StringIO(content))

        header = next(reader, None)
        if header is None:
            return result

        for line_no, values in enumerate(reader, start=2):
            values = [v.strip() for v in values]
            if not any(values):
                continue

            values += [""] * (len(TEMPLATE_HEADERS) - len(values))

            expense = Expense(
                date=to_date(values[0]) or self.today,
                vendor=values[1],
                amount=self._parse_amount(values[2]),
                category=values[3] or self.DEFAULT_CATEGORY,
                note=values[4],
                created_by=created_by,
            )

            if expense.is_valid:
                result.expenses.append(expense)
            else:
                result.errors += 1
                result.error_rows.append(line_no)

        if result.errors:
            logger.warning(f"Expense import skipped {result.errors} rows: {result.error_rows}")

        return result
