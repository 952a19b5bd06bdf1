"""
Admin API Routes

Provides profile management and report access grants for administrators.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from reports import REPORT_DEFINITIONS, is_known_report

from ..auth import User, require_admin
from ..database import execute_delete, execute_insert, execute_query, execute_update
from .account import PROFILE_COLUMNS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields."""

    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    email: str | None = None


class RoleRequest(BaseModel):
    role: str


class ReportAccessRequest(BaseModel):
    user_id: str
    report_key: str


def _updated_or_404(rows: list[dict]) -> dict:
    if not rows:
        raise HTTPException(status_code=404, detail="Profile not found")
    return rows[0]


@router.get("/users")
async def list_users(admin: User = Depends(require_admin)) -> list[dict]:
    """All profiles, newest first."""
    return execute_query(f"SELECT {PROFILE_COLUMNS} FROM profiles ORDER BY created_at DESC")


@router.put("/users/{user_id}")
async def update_user(
    user_id: str,
    request: ProfileUpdateRequest,
    admin: User = Depends(require_admin),
) -> dict:
    data = request.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    return _updated_or_404(
        execute_update("profiles", data, {"id": user_id}, returning=PROFILE_COLUMNS)
    )


@router.post("/users/{user_id}/toggle-admin")
async def toggle_admin(
    user_id: str,
    admin: User = Depends(require_admin),
) -> dict:
    """Flip the is_admin flag."""
    rows = execute_query(
        f"""
        UPDATE profiles SET is_admin = NOT coalesce(is_admin, false)
        WHERE id = :id
        RETURNING {PROFILE_COLUMNS}
        """,
        {"id": user_id},
    )
    profile = _updated_or_404(rows)
    logger.info(f"{admin.id} set is_admin={profile['is_admin']} for {user_id}")
    return profile


@router.put("/users/{user_id}/role")
async def set_role(
    user_id: str,
    request: RoleRequest,
    admin: User = Depends(require_admin),
) -> dict:
    role = request.role.strip()
    if not role:
        raise HTTPException(status_code=400, detail="Role is required")
    return _updated_or_404(
        execute_update("profiles", {"role": role}, {"id": user_id}, returning=PROFILE_COLUMNS)
    )


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
) -> dict:
    """Delete a profile row. The hosted auth account is left in place."""
    _updated_or_404(execute_delete("profiles", {"id": user_id}))
    return {"message": "Profile deleted", "user_id": user_id}


@router.post("/users/{user_id}/sync-email")
async def sync_email(
    user_id: str,
    admin: User = Depends(require_admin),
) -> dict:
    """Copy the email from the auth users table onto the profile."""
    rows = execute_query(
        "SELECT email FROM auth.users WHERE id = :id",
        {"id": user_id},
    )
    if not rows:
        raise HTTPException(status_code=404, detail="Auth user not found")

    return _updated_or_404(
        execute_update("profiles", {"email": rows[0]["email"]}, {"id": user_id}, returning=PROFILE_COLUMNS)
    )


@router.get("/report-access")
async def list_report_access(admin: User = Depends(require_admin)) -> dict:
    """All grants plus the report catalogue."""
    grants = execute_query(
        "SELECT user_id::text, report_key FROM report_access ORDER BY user_id, report_key"
    )
    return {
        "reports": [d.to_dict() for d in REPORT_DEFINITIONS.values()],
        "grants": grants,
    }


@router.post("/report-access", status_code=201)
async def grant_report_access(
    request: ReportAccessRequest,
    admin: User = Depends(require_admin),
) -> dict:
    if not is_known_report(request.report_key):
        raise HTTPException(status_code=400, detail=f"Unknown report: {request.report_key}")

    existing = execute_query(
        "SELECT 1 FROM report_access WHERE user_id = :user_id AND report_key = :report_key",
        request.model_dump(),
    )
    if not existing:
        execute_insert("report_access", request.model_dump(), returning="user_id::text")

    return request.model_dump()


@router.delete("/report-access")
async def revoke_report_access(
    request: ReportAccessRequest,
    admin: User = Depends(require_admin),
) -> dict:
    execute_delete("report_access", request.model_dump(), returning="user_id::text")
    return {"message": "Report access revoked", **request.model_dump()}
