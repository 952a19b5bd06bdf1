"""
Directory API Routes

Customers, vendors and inventory share the same list/search/create/update/
delete shape, so their routers are built from one factory.
"""

import logging
from typing import Type

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from directory import ContactRecord, DirectoryError, InventoryRecord
from listing import filter_records, paginate

from ..auth import User, get_current_user, require_edit
from ..database import execute_delete, execute_insert, execute_query, execute_update
from ..queries import scope_conditions, where_sql

logger = logging.getLogger(__name__)


class ContactRequest(BaseModel):
    """Customer or vendor payload."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class InventoryRequest(BaseModel):
    """Inventory item payload."""

    name: str
    sku: str | None = None
    price: float | None = None
    stock: int | None = 0
    description: str | None = None


CONTACT_COLUMNS = "id::text, name, email, phone, address, created_by::text, created_at"
INVENTORY_COLUMNS = "id::text, name, sku, price, stock, description, created_by::text, created_at"


def _serialize(row: dict) -> dict:
    data = dict(row)
    if data.get("price") is not None:
        data["price"] = float(data["price"])
    if data.get("created_at") is not None:
        data["created_at"] = data["created_at"].isoformat()
    return data


def build_directory_router(
    table: str,
    label: str,
    columns: str,
    request_model: Type[BaseModel],
    record_cls: type,
) -> APIRouter:
    """Build the CRUD router for one directory table.

    Args:
        table: Table name, also the URL prefix
        label: Singular name used in error messages
        columns: SELECT column list
        request_model: Pydantic request body
        record_cls: Record class that shapes the stored row

    Returns:
        APIRouter
    """
    router = APIRouter(prefix=f"/{table}", tags=[table])

    def get_or_404(record_id: str, user: User) -> dict:
        params = {"id": record_id}
        conditions = ["id::text = :id"] + scope_conditions(user, params)
        rows = execute_query(f"SELECT {columns} FROM {table} {where_sql(conditions)}", params)
        if not rows:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return rows[0]

    def to_record(request: BaseModel, created_by: str | None = None) -> dict:
        try:
            return record_cls(**request.model_dump()).to_record(created_by)
        except DirectoryError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.get("")
    async def list_records(
        search: str | None = Query(None),
        page: int = Query(1, ge=1),
        page_size: int = Query(10, ge=1, le=100),
        user: User = Depends(get_current_user),
    ) -> dict:
        """List rows newest first, filtered by name or phone."""
        params: dict = {}
        conditions = scope_conditions(user, params)
        rows = execute_query(
            f"SELECT {columns} FROM {table} {where_sql(conditions)} ORDER BY created_at DESC",
            params,
        )
        matches = filter_records([_serialize(r) for r in rows], search)
        return paginate(matches, page, page_size).to_dict()

    @router.get("/{record_id}")
    async def get_record(
        record_id: str,
        user: User = Depends(get_current_user),
    ) -> dict:
        return _serialize(get_or_404(record_id, user))

    @router.post("", status_code=201)
    async def create_record(
        request: request_model,
        user: User = Depends(require_edit),
    ) -> dict:
        record = to_record(request, created_by=user.id)
        row = execute_insert(table, record, returning=columns)
        logger.info(f"Created {label.lower()} {row.get('id')} for {user.id}")
        return _serialize(row)

    @router.put("/{record_id}")
    async def update_record(
        record_id: str,
        request: request_model,
        user: User = Depends(require_edit),
    ) -> dict:
        get_or_404(record_id, user)
        rows = execute_update(table, to_record(request), {"id": record_id}, returning=columns)
        if not rows:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return _serialize(rows[0])

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str,
        user: User = Depends(require_edit),
    ) -> dict:
        get_or_404(record_id, user)
        execute_delete(table, {"id": record_id})
        return {"message": f"{label} deleted", "id": record_id}

    return router


customers_router = build_directory_router(
    "customers", "Customer", CONTACT_COLUMNS, ContactRequest, ContactRecord
)
vendors_router = build_directory_router(
    "vendors", "Vendor", CONTACT_COLUMNS, ContactRequest, ContactRecord
)
inventory_router = build_directory_router(
    "inventory", "Inventory item", INVENTORY_COLUMNS, InventoryRequest, InventoryRecord
)
