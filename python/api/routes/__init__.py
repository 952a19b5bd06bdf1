"""
API Routes Package

Contains all route modules for the QuickFlow API.
"""

from .dashboard import router as dashboard_router
from .invoices import router as invoices_router
from .expenses import router as expenses_router
from .directory import customers_router, vendors_router, inventory_router
from .reports import router as reports_router
from .notifications import router as notifications_router
from .account import router as account_router
from .admin import router as admin_router
from .contact import router as contact_router

__all__ = [
    "dashboard_router",
    "invoices_router",
    "expenses_router",
    "customers_router",
    "vendors_router",
    "inventory_router",
    "reports_router",
    "notifications_router",
    "account_router",
    "admin_router",
    "contact_router",
    "ROUTERS",
]

# Mount order under /api
ROUTERS = (
    dashboard_router,
    invoices_router,
    expenses_router,
    customers_router,
    vendors_router,
    inventory_router,
    reports_router,
    notifications_router,
    account_router,
    admin_router,
    contact_router,
)
