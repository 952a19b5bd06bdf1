"""
Invoicing Module

Invoice records, status transitions, and printable HTML/PDF rendering.
"""

from .models import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    InvoiceError,
    default_items,
    new_invoice,
)
from .renderer import render_invoice_html, render_invoice_pdf, format_money

__all__ = [
    # Models
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceError",
    "default_items",
    "new_invoice",
    # Rendering
    "render_invoice_html",
    "render_invoice_pdf",
    "format_money",
]
