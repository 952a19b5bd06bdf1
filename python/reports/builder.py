"""
Report Builder Module

Builds profit & loss, cash flow, sales-by-customer, expenses-by-vendor and
custom grouped reports from normalized invoice/expense rows.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

from .normalize import DateRange, ReportExpense, ReportInvoice

logger = logging.getLogger(__name__)


class ReportType(str, Enum):
    PROFIT_LOSS = "profitloss"
    CASHFLOW = "cashflow"
    SALES_BY_CUSTOMER = "sales_by_customer"
    EXPENSES_BY_VENDOR = "expenses_by_vendor"
    CUSTOM = "custom"


class GroupBy(str, Enum):
    NONE = "none"
    CUSTOMER = "customer"
    VENDOR = "vendor"
    MONTH = "month"


class Aggregate(str, Enum):
    SUM = "sum"
    COUNT = "count"
    AVG = "avg"


class ReportError(ValueError):
    """Raised for invalid report requests."""


TRANSACTION_COLUMNS = [("type", "Type"), ("date", "Date"), ("name", "Name"), ("amount", "Amount"), ("status", "Status")]
CASHFLOW_COLUMNS = [("date", "Date"), ("description", "Description"), ("inflow", "Inflow"), ("outflow", "Outflow"), ("balance", "Balance")]
GROUP_COLUMNS = [("name", "Name"), ("value", "Value"), ("count", "Count")]
MONTH_COLUMNS = [("month", "Month"), ("value", "Value")]

MONEY_FIELDS = {"amount", "inflow", "outflow", "balance", "value"}


@dataclass
class CustomOptions:
    """Options for the custom report."""

    include_invoices: bool = True
    include_expenses: bool = True
    group_by: GroupBy = GroupBy.NONE
    aggregate: Aggregate = Aggregate.SUM

    def __post_init__(self):
        self.group_by = GroupBy(self.group_by)
        self.aggregate = Aggregate(self.aggregate)


@dataclass
class _Tx:
    id: str
    type: str
    date: date
    name: str
    amount: Decimal
    status: str | None


@dataclass
class ReportSummary:
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.expenses

    def to_dict(self) -> dict:
        return {
            "revenue": float(self.revenue),
            "expenses": float(self.expenses),
            "profit": float(self.profit),
        }


@dataclass
class Report:
    """Built report: ordered rows plus the columns to show/export."""

    report_type: ReportType
    date_range: DateRange
    columns: list[tuple[str, str]]
    rows: list[dict[str, Any]] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=ReportSummary)

    def to_dict(self) -> dict:
        return {
            "report_type": self.report_type.value,
            "start_date": self.date_range.start.isoformat() if self.date_range.start else None,
            "end_date": self.date_range.end.isoformat() if self.date_range.end else None,
            "columns": [{"key": k, "label": label} for k, label in self.columns],
            "rows": [_jsonable(r) for r in self.rows],
            "summary": self.summary.to_dict(),
        }


def _jsonable(row: dict) -> dict:
    out = {}
    for key, value in row.items():
        if isinstance(value, Decimal):
            out[key] = float(value)
        elif isinstance(value, date):
            out[key] = value.isoformat()
        else:
            out[key] = value
    return out


def _invoice_tx(inv: ReportInvoice) -> _Tx:
    return _Tx(id=inv.id, type="Invoice", date=inv.issue_date, name=inv.customer,
               amount=inv.total, status=inv.status or None)


def _expense_tx(exp: ReportExpense) -> _Tx:
    return _Tx(id=exp.id, type="Expense", date=exp.date, name=exp.vendor,
               amount=exp.amount, status=None)


def _by_date(txs: list[_Tx]) -> list[_Tx]:
    return sorted(txs, key=lambda t: t.date)


def _group_by_name(txs: Iterable[_Tx]) -> list[dict]:
    groups: dict[str, dict] = {}
    for tx in txs:
        key = tx.name or "Unknown"
        group = groups.setdefault(key, {"name": key, "amount": Decimal("0"), "count": 0})
        group["amount"] += tx.amount
        group["count"] += 1
    return list(groups.values())


class ReportBuilder:
    """Builds reports for a date range."""

    def __init__(self, date_range: DateRange | None = None):
        self.date_range = date_range or DateRange.default()

    def filter_invoices(self, invoices: Iterable[ReportInvoice]) -> list[ReportInvoice]:
        return [i for i in invoices if self.date_range.contains(i.issue_date) and i.total is not None]

    def filter_expenses(self, expenses: Iterable[ReportExpense]) -> list[ReportExpense]:
        return [e for e in expenses if self.date_range.contains(e.date) and e.amount is not None]

    def summarize(self, invoices: list[ReportInvoice], expenses: list[ReportExpense]) -> ReportSummary:
        return ReportSummary(
            revenue=sum((i.total for i in invoices if not i.is_draft), Decimal("0")),
            expenses=sum((e.amount for e in expenses), Decimal("0")),
        )

    def build(
        self,
        report_type: ReportType | str,
        invoices: Iterable[ReportInvoice],
        expenses: Iterable[ReportExpense],
        options: CustomOptions | None = None,
    ) -> Report:
        """Build a report.

        Args:
            report_type: Which report to build
            invoices: Normalized invoices
            expenses: Normalized expenses
            options: Custom report options (custom report only)

        Returns:
            Report
        """
        try:
            report_type = ReportType(report_type)
        except ValueError:
            raise ReportError(f"Unknown report type: {report_type}")

        inv = self.filter_invoices(invoices)
        exp = self.filter_expenses(expenses)

        builders = {
            ReportType.PROFIT_LOSS: self._profit_loss,
            ReportType.CASHFLOW: self._cashflow,
            ReportType.SALES_BY_CUSTOMER: self._sales_by_customer,
            ReportType.EXPENSES_BY_VENDOR: self._expenses_by_vendor,
        }

        if report_type == ReportType.CUSTOM:
            columns, rows = self._custom(inv, exp, options or CustomOptions())
        else:
            columns, rows = builders[report_type](inv, exp)

        logger.debug(f"Built {report_type.value} report with {len(rows)} rows")

        return Report(
            report_type=report_type,
            date_range=self.date_range,
            columns=columns,
            rows=rows,
            summary=self.summarize(inv, exp),
        )

    def _profit_loss(self, inv, exp):
        txs = _by_date([_invoice_tx(i) for i in inv] + [_expense_tx(e) for e in exp])
        rows = [
            {"id": t.id or str(idx), "type": t.type, "date": t.date, "name": t.name,
             "amount": t.amount, "status": t.status}
            for idx, t in enumerate(txs)
        ]
        return TRANSACTION_COLUMNS, rows

    def _cashflow(self, inv, exp):
        txs = _by_date(
            [_invoice_tx(i) for i in inv if not i.is_draft] + [_expense_tx(e) for e in exp]
        )
        balance = Decimal("0")
        rows = []
        for idx, t in enumerate(txs):
            signed = t.amount if t.type == "Invoice" else -t.amount
            balance += signed
            rows.append({
                "id": t.id or str(idx),
                "date": t.date,
                "description": f"{t.type} - {t.name}",
                "inflow": signed if signed > 0 else Decimal("0"),
                "outflow": abs(signed) if signed < 0 else Decimal("0"),
                "balance": balance,
            })
        return CASHFLOW_COLUMNS, rows

    def _ranked_groups(self, txs):
        groups = sorted(_group_by_name(txs), key=lambda g: g["amount"], reverse=True)
        return GROUP_COLUMNS, [
            {"id": str(idx), "name": g["name"], "value": g["amount"], "count": g["count"]}
            for idx, g in enumerate(groups)
        ]

    def _sales_by_customer(self, inv, exp):
        return self._ranked_groups(_invoice_tx(i) for i in inv)

    def _expenses_by_vendor(self, inv, exp):
        return self._ranked_groups(_expense_tx(e) for e in exp)

    def _custom(self, inv, exp, options: CustomOptions):
        txs: list[_Tx] = []
        if options.include_invoices:
            txs += [_invoice_tx(i) for i in inv]
        if options.include_expenses:
            txs += [_expense_tx(e) for e in exp]

        if options.group_by == GroupBy.NONE:
            rows = [
                {"id": t.id or str(idx), "type": t.type, "date": t.date, "name": t.name,
                 "amount": t.amount, "status": None}
                for idx, t in enumerate(_by_date(txs))
            ]
            return TRANSACTION_COLUMNS, rows

        if options.group_by == GroupBy.MONTH:
            months: dict[str, Decimal] = {}
            for t in txs:
                key = f"{t.date.year}-{t.date.month:02d}"
                months[key] = months.get(key, Decimal("0")) + t.amount
            return MONTH_COLUMNS, [
                {"id": str(idx), "month": month, "value": months[month]}
                for idx, month in enumerate(sorted(months))
            ]

        # customer / vendor grouping keys on the counterparty name
        groups = _group_by_name(txs)
        rows = []
        for idx, g in enumerate(groups):
            if options.aggregate == Aggregate.SUM:
                rows.append({"id": str(idx), "name": g["name"], "value": g["amount"], "count": g["count"]})
            elif options.aggregate == Aggregate.COUNT:
                rows.append({"id": str(idx), "name": g["name"], "value": g["count"], "count": None})
            else:
                rows.append({"id": str(idx), "name": g["name"],
                             "value": g["amount"] / max(1, g["count"]), "count": g["count"]})
        return GROUP_COLUMNS, rows
