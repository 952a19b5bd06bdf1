"""
Invoice Renderer Module

Renders printable invoices as HTML and as PDF documents.
"""

import html
import logging
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from .models import Invoice

logger = logging.getLogger(__name__)


def format_money(amount: Decimal | float) -> str:
    """Format an amount as $1234.56."""
    return f"${Decimal(str(amount)):.2f}"


def _fmt_qty(quantity: Decimal) -> str:
    return f"{quantity.normalize():f}" if quantity == quantity.to_integral() else str(quantity)


def _fmt_date(value: date | None) -> str:
    return value.isoformat() if value else "-"


def render_invoice_html(invoice: Invoice) -> str:
    """Render the print view of an invoice.

    Args:
        invoice: Invoice to render

    Returns:
        Standalone HTML document
    """
    esc = html.escape
    rows = "".join(
        f"<tr><td>{esc(item.description)}</td><td>{_fmt_qty(item.quantity)}</td>"
        f"<td>{format_money(item.unit_price)}</td><td>{format_money(item.line_total)}</td></tr>"
        for item in invoice.items
    )
    title = esc(invoice.id or "draft")

    return (
        f"<html><head><title>Invoice {title}</title></head><body>\n"
        f"<h1>Invoice</h1>\n"
        f"<p><strong>Customer:</strong> {esc(invoice.customer)}</p>\n"
        f"<p><strong>Issue:</strong> {_fmt_date(invoice.issue_date)} &nbsp; "
        f"<strong>Due:</strong> {_fmt_date(invoice.due_date)}</p>\n"
        f'<table border="1" cellspacing="0" cellpadding="6">\n'
        f"<tr><th>Description</th><th>Qty</th><th>Unit</th><th>Total</th></tr>\n"
        f"{rows}\n"
        f"</table>\n"
        f"<h2>Total: {format_money(invoice.total)}</h2>\n"
        f"</body></html>"
    )


def render_invoice_pdf(invoice: Invoice, company_name: str | None = None) -> bytes:
    """Render an invoice as a PDF document.

    Args:
        invoice: Invoice to render
        company_name: Optional issuer name for the header

    Returns:
        PDF bytes
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.75*inch,
        leftMargin=0.75*inch,
        topMargin=0.75*inch,
        bottomMargin=0.75*inch,
        title=f"Invoice {invoice.id or 'draft'}",
    )

    styles = getSampleStyleSheet()
    elements = []

    if company_name:
        elements.append(Paragraph(html.escape(company_name), styles['Heading2']))
    elements.append(Paragraph("<b>Invoice</b>", styles['Heading1']))
    elements.append(Spacer(1, 0.15*inch))

    info_table = Table(
        [
            ["Customer:", invoice.customer],
            ["Issue:", _fmt_date(invoice.issue_date)],
            ["Due:", _fmt_date(invoice.due_date)],
            ["Status:", invoice.status.value.capitalize()],
        ],
        colWidths=[1.2*inch, 4*inch],
    )
    info_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.25*inch))

    item_rows = [["Description", "Qty", "Unit", "Total"]]
    for item in invoice.items:
        item_rows.append([
            item.description,
            _fmt_qty(item.quantity),
            format_money(item.unit_price),
            format_money(item.line_total),
        ])
    item_rows.append(["", "", "Total", format_money(invoice.total)])

    items_table = Table(item_rows, colWidths=[3.4*inch, 0.8*inch, 1.1*inch, 1.2*inch])
    items_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -2), 0.5, colors.grey),
        ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('LINEABOVE', (2, -1), (-1, -1), 1.5, colors.black),
    ]))
    elements.append(items_table)

    elements.append(Spacer(1, 0.4*inch))
    elements.append(Paragraph(
        f"<i>Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}</i>",
        styles['Normal']
    ))

    doc.build(elements)
    logger.debug(f"Rendered invoice {invoice.id} PDF ({buffer.tell()} bytes)")
    return buffer.getvalue()
