"""
Reports API Routes

Provides report definitions, report runs and CSV/PDF/Excel exports.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel

from reports import (
    REPORT_DEFINITIONS,
    Aggregate,
    CustomOptions,
    DateRange,
    GroupBy,
    Report,
    ReportBuilder,
    ReportError,
    ReportExcelBuilder,
    allowed_report_keys,
    export_csv,
    export_pdf,
    is_known_report,
    map_expense_row,
    map_invoice_row,
    report_filename,
)

from ..auth import User, access_config, get_current_user, require_export
from ..database import execute_query
from ..queries import fetch_company, fetch_expense_rows, fetch_invoice_rows

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "pdf": "application/pdf",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class ReportDefinitionResponse(BaseModel):
    key: str
    title: str
    description: str


def granted_reports(user_id: str) -> list[str]:
    """Explicit report_access grants for a user."""
    rows = execute_query(
        "SELECT report_key FROM report_access WHERE user_id = :user_id",
        {"user_id": user_id},
    )
    return [r["report_key"] for r in rows]


def user_report_keys(user: User) -> list[str]:
    if user.is_admin_user:
        return allowed_report_keys(True, [])
    return allowed_report_keys(
        False,
        access_config.reports_for(user.role),
        granted_reports(user.id),
    )


def check_report_access(report_key: str, user: User) -> None:
    if not is_known_report(report_key):
        raise HTTPException(status_code=404, detail=f"Unknown report: {report_key}")
    if report_key not in user_report_keys(user):
        raise HTTPException(status_code=403, detail=f"No access to report: {report_key}")


def run_report(
    report_key: str,
    user: User,
    start_date: date | None,
    end_date: date | None,
    all_dates: bool,
    options: CustomOptions,
) -> Report:
    """Load rows and build the requested report."""
    check_report_access(report_key, user)

    if all_dates:
        date_range = DateRange()
    elif start_date or end_date:
        date_range = DateRange(start=start_date, end=end_date)
    else:
        date_range = DateRange.default()

    invoices = [map_invoice_row(r) for r in fetch_invoice_rows(user)]
    expenses = [map_expense_row(r) for r in fetch_expense_rows(user)]

    try:
        return ReportBuilder(date_range).build(report_key, invoices, expenses, options)
    except ReportError as e:
        raise HTTPException(status_code=400, detail=str(e))


def custom_options(
    include_invoices: bool = Query(True),
    include_expenses: bool = Query(True),
    group_by: GroupBy = Query(GroupBy.NONE),
    aggregate: Aggregate = Query(Aggregate.SUM),
) -> CustomOptions:
    return CustomOptions(
        include_invoices=include_invoices,
        include_expenses=include_expenses,
        group_by=group_by,
        aggregate=aggregate,
    )


@router.get("/definitions", response_model=list[ReportDefinitionResponse])
async def list_report_definitions(
    user: User = Depends(get_current_user),
) -> list[ReportDefinitionResponse]:
    """Report definitions the user may run."""
    return [
        ReportDefinitionResponse(**REPORT_DEFINITIONS[key].to_dict())
        for key in user_report_keys(user)
    ]


@router.get("/{report_key}")
async def get_report(
    report_key: str,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    all_dates: bool = Query(False),
    options: CustomOptions = Depends(custom_options),
    user: User = Depends(get_current_user),
) -> dict:
    """Run a report for a date range (default: last 30 days).

    Args:
        report_key: profitloss, cashflow, sales_by_customer, expenses_by_vendor or custom
        start_date: Inclusive start
        end_date: Inclusive end
        all_dates: Ignore the date range
        options: Custom report grouping/aggregation
        user: Authenticated user

    Returns:
        Report columns, rows and summary
    """
    report = run_report(report_key, user, start_date, end_date, all_dates, options)
    return report.to_dict()


@router.get("/{report_key}/export")
async def export_report(
    report_key: str,
    format: str = Query("csv", pattern="^(csv|pdf|xlsx)$"),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    all_dates: bool = Query(False),
    options: CustomOptions = Depends(custom_options),
    user: User = Depends(require_export),
) -> Response:
    """Download a report as CSV, PDF or Excel."""
    report = run_report(report_key, user, start_date, end_date, all_dates, options)

    if format == "csv":
        content = export_csv(report).encode("utf-8")
    else:
        company = fetch_company(user.id)
        company_name = company.get("name") if company else None
        if format == "pdf":
            content = export_pdf(report, company_name)
        else:
            content = ReportExcelBuilder().build(report, company_name)

    filename = report_filename(report, format)
    logger.info(f"Exported {report_key} report as {filename}")

    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
