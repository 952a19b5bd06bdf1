"""
Invoices API Routes

Provides endpoints for creating, sending, paying and printing invoices.
"""

import logging
from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel, Field

from invoicing import (
    Invoice,
    InvoiceError,
    InvoiceItem,
    InvoiceStatus,
    default_items,
    new_invoice,
    render_invoice_html,
    render_invoice_pdf,
)
from invoicing.models import DEFAULT_DUE_DAYS
from listing import paginate

from ..auth import User, get_current_user, require_edit
from ..database import delete_rows, execute_query, execute_update, get_db_context, insert_row
from ..queries import fetch_company, fetch_invoice_items, fetch_invoices, scope_conditions, where_sql

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


class InvoiceItemIn(BaseModel):
    """Invoice line in a create request."""

    description: str = ""
    quantity: float = Field(1, ge=0)
    unit_price: float = Field(0, ge=0)


class InvoiceCreateRequest(BaseModel):
    """Request to create a draft invoice."""

    customer: str
    issue_date: date | None = None
    due_date: date | None = None
    items: list[InvoiceItemIn] | None = None


class InvoiceListResponse(BaseModel):
    """Paginated invoice list response."""

    items: list[dict]
    total: int
    page: int
    page_size: int
    total_pages: int


def get_invoice_or_404(invoice_id: str, user: User) -> Invoice:
    """Load a visible invoice with its items."""
    params = {"id": invoice_id}
    conditions = ["id::text = :id"] + scope_conditions(user, params)

    rows = execute_query(
        f"""
        SELECT id::text, customer, issue_date, due_date, status, total,
               created_by::text, created_at
        FROM invoices
        {where_sql(conditions)}
        """,
        params,
    )
    if not rows:
        raise HTTPException(status_code=404, detail="Invoice not found")

    items = fetch_invoice_items([invoice_id]).get(invoice_id, [])
    return Invoice.from_row(rows[0], items)


def _set_status(invoice: Invoice) -> dict:
    execute_update(
        "invoices",
        {"status": invoice.status.value},
        {"id": invoice.id},
    )
    return invoice.to_dict()


@router.get("/defaults")
async def get_invoice_defaults(
    user: User = Depends(get_current_user),
) -> dict:
    """Pre-filled values for the create form."""
    today = date.today()
    items = default_items()
    return {
        "issue_date": today.isoformat(),
        "due_date": (today + timedelta(days=DEFAULT_DUE_DAYS)).isoformat(),
        "items": [i.to_dict() for i in items],
        "total": float(sum(i.line_total for i in items)),
    }


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    status: InvoiceStatus | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
) -> InvoiceListResponse:
    """List invoices, newest first.

    Args:
        status: Filter by status
        page: Page number (clamped to the last page)
        page_size: Items per page
        user: Authenticated user

    Returns:
        Paginated list of invoices
    """
    invoices = fetch_invoices(user, status=status.value if status else None)
    result = paginate([i.to_dict() for i in invoices], page, page_size)

    return InvoiceListResponse(
        items=result.items,
        total=result.total_items,
        page=result.current_page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("", status_code=201)
async def create_invoice(
    request: InvoiceCreateRequest,
    user: User = Depends(require_edit),
) -> dict:
    """Save a new draft invoice with its line items."""
    try:
        invoice = new_invoice(
            customer=request.customer,
            issue_date=request.issue_date,
            due_date=request.due_date,
            items=[
                InvoiceItem(description=i.description, quantity=i.quantity, unit_price=i.unit_price)
                for i in request.items
            ] if request.items else None,
            created_by=user.id,
        )
    except InvoiceError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # Invoice and items commit together
    with get_db_context() as db:
        row = insert_row(
            db,
            "invoices",
            {
                "customer": invoice.customer,
                "issue_date": invoice.issue_date,
                "due_date": invoice.due_date,
                "status": invoice.status.value,
                "total": invoice.total,
                "created_by": invoice.created_by,
            },
            returning="id::text, created_at",
        )
        invoice.id = row["id"]
        invoice.created_at = row.get("created_at")

        for position, item in enumerate(invoice.items):
            insert_row(
                db,
                "invoice_items",
                {
                    "invoice_id": invoice.id,
                    "position": position,
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                },
            )
        db.commit()

    logger.info(f"Created invoice {invoice.id} for {invoice.customer} ({invoice.total})")
    return invoice.to_dict()


@router.get("/{invoice_id}")
async def get_invoice(
    invoice_id: str,
    user: User = Depends(get_current_user),
) -> dict:
    """Get a single invoice with its items."""
    return get_invoice_or_404(invoice_id, user).to_dict()


@router.post("/{invoice_id}/send")
async def send_invoice(
    invoice_id: str,
    user: User = Depends(require_edit),
) -> dict:
    """Mark an invoice as sent. Delivery is left to the printed/PDF copy."""
    invoice = get_invoice_or_404(invoice_id, user)
    try:
        invoice.send()
    except InvoiceError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"message": "Invoice sent", "invoice": _set_status(invoice)}


@router.post("/{invoice_id}/pay")
async def mark_invoice_paid(
    invoice_id: str,
    user: User = Depends(require_edit),
) -> dict:
    """Mark an invoice as paid."""
    invoice = get_invoice_or_404(invoice_id, user)
    invoice.mark_paid()
    return {"message": "Invoice marked as paid", "invoice": _set_status(invoice)}


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: str,
    user: User = Depends(require_edit),
) -> dict:
    """Delete an invoice and its items."""
    get_invoice_or_404(invoice_id, user)
    with get_db_context() as db:
        delete_rows(db, "invoice_items", {"invoice_id": invoice_id}, returning="invoice_id")
        delete_rows(db, "invoices", {"id": invoice_id})
        db.commit()
    return {"message": "Invoice deleted", "invoice_id": invoice_id}


@router.get("/{invoice_id}/print", response_class=HTMLResponse)
async def print_invoice(
    invoice_id: str,
    user: User = Depends(get_current_user),
) -> HTMLResponse:
    """Printable HTML view of an invoice."""
    invoice = get_invoice_or_404(invoice_id, user)
    return HTMLResponse(render_invoice_html(invoice))


@router.get("/{invoice_id}/pdf")
async def download_invoice_pdf(
    invoice_id: str,
    user: User = Depends(get_current_user),
) -> Response:
    """Invoice as a PDF download."""
    invoice = get_invoice_or_404(invoice_id, user)
    company = fetch_company(user.id)
    content = render_invoice_pdf(invoice, company_name=company.get("name") if company else None)

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice-{invoice_id}.pdf"'},
    )
