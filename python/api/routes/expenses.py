"""
Expenses API Routes

Provides endpoints for recording expenses, category suggestions and CSV import.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from expenses import Expense, ExpenseCategorizer, ExpenseCSVImporter, expense_template_csv
from listing import paginate

from ..auth import User, get_current_user, require_edit
from ..database import execute_delete, execute_insert, execute_query
from ..queries import fetch_expenses, scope_conditions, where_sql

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])

categorizer = ExpenseCategorizer()


class ExpenseCreateRequest(BaseModel):
    """Request to record an expense."""

    model_config = ConfigDict(populate_by_name=True)

    vendor: str
    amount: float = Field(..., gt=0)
    expense_date: date | None = Field(None, alias="date")
    category: str | None = None
    note: str | None = None
    receipt_url: str | None = None


class SuggestionResponse(BaseModel):
    """Suggested category for a vendor/amount pair."""

    category: str
    confidence: float
    confidence_percent: int
    method: str


@router.get("")
async def list_expenses(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
) -> dict:
    """List expenses, newest first."""
    expenses = fetch_expenses(user, start_date, end_date)
    return paginate([e.to_dict() for e in expenses], page, page_size).to_dict()


@router.get("/suggest", response_model=SuggestionResponse)
async def suggest_category(
    vendor: str = Query(""),
    amount: float = Query(0),
    user: User = Depends(get_current_user),
) -> SuggestionResponse:
    """Suggest a category as the vendor and amount are typed."""
    return SuggestionResponse(**categorizer.suggest(vendor, amount).to_dict())


@router.get("/template")
async def download_template() -> Response:
    """CSV template for bulk import."""
    return Response(
        content=expense_template_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="expenses-template.csv"'},
    )


@router.post("", status_code=201)
async def create_expense(
    request: ExpenseCreateRequest,
    user: User = Depends(require_edit),
) -> dict:
    """Record an expense. A blank category takes the suggested one."""
    category = (request.category or "").strip()
    suggestion = None
    if not category:
        suggestion = categorizer.suggest(request.vendor, request.amount)
        category = suggestion.category

    expense = Expense(
        date=request.expense_date or date.today(),
        vendor=request.vendor.strip(),
        amount=request.amount,
        category=category,
        note=request.note or "",
        receipt_url=request.receipt_url,
        created_by=user.id,
    )
    if not expense.is_valid:
        raise HTTPException(status_code=400, detail="Vendor and a positive amount are required")

    row = execute_insert("expenses", expense.to_record(), returning="id::text, created_at")
    expense.id = row["id"]
    expense.created_at = row.get("created_at")

    result = expense.to_dict()
    if suggestion:
        result["suggestion"] = suggestion.to_dict()
    return result


@router.post("/import")
async def import_expenses(
    request: Request,
    user: User = Depends(require_edit),
) -> dict:
    """Import expenses from a CSV upload (request body is the CSV text)."""
    content = await request.body()
    if not content.strip():
        raise HTTPException(status_code=400, detail="Empty CSV upload")

    try:
        result = ExpenseCSVImporter().parse(content, created_by=user.id)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV upload must be UTF-8 encoded")

    for expense in result.expenses:
        row = execute_insert("expenses", expense.to_record())
        expense.id = row["id"]

    logger.info(f"Imported {result.imported} expenses for {user.id} ({result.errors} errors)")
    return result.to_dict()


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: str,
    user: User = Depends(require_edit),
) -> dict:
    """Delete an expense."""
    params = {"id": expense_id}
    conditions = ["id::text = :id"] + scope_conditions(user, params)
    rows = execute_query(f"SELECT id::text FROM expenses {where_sql(conditions)}", params)
    if not rows:
        raise HTTPException(status_code=404, detail="Expense not found")

    execute_delete("expenses", {"id": expense_id})
    return {"message": "Expense deleted", "expense_id": expense_id}
