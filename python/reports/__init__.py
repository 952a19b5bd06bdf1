"""
Reports Module

Financial report building, exports, and the report catalog.
"""

from .normalize import (
    DateRange,
    ReportExpense,
    ReportInvoice,
    map_expense_row,
    map_invoice_row,
)
from .builder import (
    Aggregate,
    CustomOptions,
    GroupBy,
    Report,
    ReportBuilder,
    ReportError,
    ReportSummary,
    ReportType,
)
from .exporters import ReportExcelBuilder, export_csv, export_pdf, report_filename
from .catalog import REPORT_DEFINITIONS, ReportDefinition, allowed_report_keys, is_known_report

__all__ = [
    # Input normalization
    "DateRange",
    "ReportExpense",
    "ReportInvoice",
    "map_expense_row",
    "map_invoice_row",
    # Building
    "Aggregate",
    "CustomOptions",
    "GroupBy",
    "Report",
    "ReportBuilder",
    "ReportError",
    "ReportSummary",
    "ReportType",
    # Exports
    "ReportExcelBuilder",
    "export_csv",
    "export_pdf",
    "report_filename",
    # Catalog
    "REPORT_DEFINITIONS",
    "ReportDefinition",
    "allowed_report_keys",
    "is_known_report",
]
