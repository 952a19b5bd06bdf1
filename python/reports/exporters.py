"""
Report Exporters Module

Exports built reports as CSV, PDF and Excel.
"""

import csv
import html
import logging
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO, StringIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from .builder import MONEY_FIELDS, Report

logger = logging.getLogger(__name__)

DEFAULT_COMPANY_NAME = "Your Company"
FILENAME_PREFIX = "quickflow-report"


def report_filename(report: Report, extension: str) -> str:
    """quickflow-report-{start|all}-to-{end|all}.{extension}"""
    return f"{FILENAME_PREFIX}-{report.date_range.filename_part}.{extension}"


def format_cell(key: str, value: Any) -> str:
    """Display text for one report cell."""
    if value is None or value == "":
        return "-"
    if isinstance(value, Decimal) or (key in MONEY_FIELDS and isinstance(value, float)):
        return f"{Decimal(str(value)):.2f}"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _display(key: str, value: Any) -> str:
    text = format_cell(key, value)
    if isinstance(value, Decimal) and key in MONEY_FIELDS:
        return f"${text}"
    return text


def export_csv(report: Report) -> str:
    """Export a report as CSV with every cell quoted.

    Args:
        report: Built report

    Returns:
        CSV text
    """
    buffer = StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([label for _, label in report.columns])
    for row in report.rows:
        writer.writerow([format_cell(key, row.get(key)) for key, _ in report.columns])
    return buffer.getvalue()


def export_pdf(report: Report, company_name: str | None = None) -> bytes:
    """Export a report as a printable PDF.

    Args:
        report: Built report
        company_name: Header name (defaults to "Your Company")

    Returns:
        PDF bytes
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.5*inch,
        leftMargin=0.5*inch,
        topMargin=0.5*inch,
        bottomMargin=0.5*inch,
        title="Filtered Report",
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"<b>{html.escape(company_name or DEFAULT_COMPANY_NAME)}</b>", styles['Heading1']),
        Paragraph("Filtered Report", styles['Heading2']),
        Paragraph(html.escape(report.date_range.label), styles['Normal']),
        Spacer(1, 0.2*inch),
    ]

    summary = report.summary
    summary_table = Table(
        [
            ["Revenue", f"${summary.revenue:,.2f}"],
            ["Expenses", f"${summary.expenses:,.2f}"],
            ["Profit", f"${summary.profit:,.2f}"],
        ],
        colWidths=[1.5*inch, 1.8*inch],
    )
    summary_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
    ]))
    elements.append(summary_table)
    elements.append(Spacer(1, 0.25*inch))

    table_data = [[label for _, label in report.columns]]
    for row in report.rows:
        table_data.append([_display(key, row.get(key)) for key, _ in report.columns])

    if len(table_data) == 1:
        elements.append(Paragraph("<i>No rows for this range.</i>", styles['Normal']))
    else:
        money_cols = [i for i, (key, _) in enumerate(report.columns) if key in MONEY_FIELDS]
        style = [
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('LINEBELOW', (0, 0), (-1, 0), 1, colors.black),
            ('LINEBELOW', (0, 1), (-1, -1), 0.25, colors.lightgrey),
        ]
        for col in money_cols:
            style.append(('ALIGN', (col, 0), (col, -1), 'RIGHT'))

        table = Table(table_data, repeatRows=1)
        table.setStyle(TableStyle(style))
        elements.append(table)

    elements.append(Spacer(1, 0.3*inch))
    elements.append(Paragraph(
        f"<i>Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}</i>",
        styles['Normal']
    ))

    doc.build(elements)
    return buffer.getvalue()


class ReportExcelBuilder:
    """Builds an Excel workbook for a report."""

    def __init__(self, currency_format: str = "#,##0.00"):
        self.currency_format = currency_format
        self._setup_styles()

    def _setup_styles(self) -> None:
        self.title_font = Font(name="Arial", size=14, bold=True)
        self.header_font = Font(name="Arial", size=11, bold=True)
        self.header_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
        self.total_font = Font(name="Arial", size=11, bold=True)
        self.normal_font = Font(name="Arial", size=10)

        thin = Side(style="thin", color="000000")
        self.border = Border(left=thin, right=thin, top=thin, bottom=thin)
        self.center_align = Alignment(horizontal="center", vertical="center")
        self.right_align = Alignment(horizontal="right", vertical="center")

    def build(self, report: Report, company_name: str | None = None) -> bytes:
        """Build the workbook.

        Args:
            report: Built report
            company_name: Title row text

        Returns:
            XLSX bytes
        """
        wb = Workbook()
        ws = wb.active
        ws.title = report.report_type.value[:31]

        ncols = len(report.columns)
        last_col = get_column_letter(ncols)

        ws.merge_cells(f"A1:{last_col}1")
        ws["A1"].value = company_name or DEFAULT_COMPANY_NAME
        ws["A1"].font = self.title_font
        ws["A1"].alignment = self.center_align

        ws.merge_cells(f"A2:{last_col}2")
        ws["A2"].value = report.date_range.label
        ws["A2"].font = self.normal_font
        ws["A2"].alignment = self.center_align

        header_row = 4
        for col, (_, label) in enumerate(report.columns, 1):
            cell = ws.cell(row=header_row, column=col, value=label)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.border = self.border
            cell.alignment = self.center_align
            ws.column_dimensions[get_column_letter(col)].width = 30 if col == 1 or label in ("Name", "Description") else 15

        row = header_row + 1
        for record in report.rows:
            for col, (key, _) in enumerate(report.columns, 1):
                value = record.get(key)
                if isinstance(value, Decimal):
                    cell = ws.cell(row=row, column=col, value=float(value))
                    cell.number_format = self.currency_format
                    cell.alignment = self.right_align
                elif isinstance(value, (date, datetime)):
                    cell = ws.cell(row=row, column=col, value=value.isoformat())
                else:
                    cell = ws.cell(row=row, column=col, value=value if value is not None else "")
                cell.border = self.border
                cell.font = self.normal_font
            row += 1

        row += 1
        summary = report.summary
        for label, amount in (("Revenue", summary.revenue), ("Expenses", summary.expenses), ("Profit", summary.profit)):
            ws.cell(row=row, column=1, value=label).font = self.total_font
            cell = ws.cell(row=row, column=2, value=float(amount))
            cell.font = self.total_font
            cell.number_format = self.currency_format
            row += 1

        buffer = BytesIO()
        wb.save(buffer)
        logger.info(f"Generated {report.report_type.value} workbook with {len(report.rows)} rows")
        return buffer.getvalue()
