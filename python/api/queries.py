"""
Shared Queries Module

Visibility scoping and the invoice/expense fetches used by several routes.
"""

from datetime import date

from expenses.models import Expense
from invoicing.models import Invoice

from .auth import User
from .database import execute_query


def scope_conditions(user: User, params: dict, column: str = "created_by") -> list[str]:
    """Non-admins only see rows they created."""
    if user.is_admin_user:
        return []
    params["owner_id"] = user.id
    return [f"{column} = :owner_id"]


def where_sql(conditions: list[str]) -> str:
    return "WHERE " + " AND ".join(conditions) if conditions else ""


def fetch_invoice_items(invoice_ids: list[str]) -> dict[str, list[dict]]:
    """Line items grouped by invoice id, in position order."""
    if not invoice_ids:
        return {}

    rows = execute_query(
        """
        SELECT invoice_id::text, description, quantity, unit_price
        FROM invoice_items
        WHERE invoice_id::text = ANY(:ids)
        ORDER BY invoice_id, position
        """,
        {"ids": invoice_ids},
    )

    grouped: dict[str, list[dict]] = {}
    for row in rows:
        grouped.setdefault(row["invoice_id"], []).append(row)
    return grouped


def fetch_invoice_rows(
    user: User,
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = None,
) -> list[dict]:
    params: dict = {}
    conditions = scope_conditions(user, params)

    if start_date:
        conditions.append("issue_date >= :start_date")
        params["start_date"] = start_date

    if end_date:
        conditions.append("issue_date <= :end_date")
        params["end_date"] = end_date

    if status:
        conditions.append("status = :status")
        params["status"] = status

    query = f"""
        SELECT
            id::text,
            customer,
            issue_date,
            due_date,
            status,
            total,
            created_by::text,
            created_at
        FROM invoices
        {where_sql(conditions)}
        ORDER BY created_at DESC
    """
    return execute_query(query, params)


def fetch_invoices(
    user: User,
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = None,
) -> list[Invoice]:
    """Visible invoices with their line items, newest first."""
    rows = fetch_invoice_rows(user, start_date, end_date, status)
    items = fetch_invoice_items([r["id"] for r in rows])
    return [Invoice.from_row(r, items.get(r["id"], [])) for r in rows]


def fetch_expense_rows(
    user: User,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict]:
    params: dict = {}
    conditions = scope_conditions(user, params)

    if start_date:
        conditions.append("date >= :start_date")
        params["start_date"] = start_date

    if end_date:
        conditions.append("date <= :end_date")
        params["end_date"] = end_date

    query = f"""
        SELECT
            id::text,
            date,
            vendor,
            amount,
            category,
            note,
            receipt_url,
            created_by::text,
            created_at
        FROM expenses
        {where_sql(conditions)}
        ORDER BY date DESC, created_at DESC
    """
    return execute_query(query, params)


def fetch_expenses(
    user: User,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Expense]:
    """Visible expenses, newest first."""
    return [Expense.from_row(r) for r in fetch_expense_rows(user, start_date, end_date)]


def fetch_company(owner_id: str) -> dict | None:
    rows = execute_query(
        """
        SELECT id::text, owner_id::text, name, logo_url, business_type, region,
               currency, fiscal_year_start, created_at, updated_at
        FROM companies
        WHERE owner_id = :owner_id
        """,
        {"owner_id": owner_id},
    )
    return rows[0] if rows else None
