"""
Account API Routes

Provides the signed-in user's settings, profile, company, onboarding and
navigation shell.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from accounts import OnboardingData, OnboardingError, display_name, initials, visible_items

from ..auth import User, get_current_user
from ..database import execute_query, execute_update
from ..queries import fetch_company

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["account"])

PROFILE_COLUMNS = (
    "id::text, email, first_name, last_name, display_name, role, is_admin, created_at"
)


class OnboardingRequest(BaseModel):
    """Onboarding wizard submission."""

    company: str
    first_name: str = ""
    last_name: str = ""
    business_type: str = ""
    region: str = ""
    currency: str = "USD"
    fiscal_year_start: date | None = None


def fetch_profile(user_id: str) -> dict | None:
    rows = execute_query(
        f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE id = :id",
        {"id": user_id},
    )
    return rows[0] if rows else None


@router.get("/settings")
async def get_settings(user: User = Depends(get_current_user)) -> dict:
    """Settings page: account email and role."""
    return {"email": user.email, "role": user.role, "is_admin": user.is_admin_user}


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)) -> dict:
    profile = fetch_profile(user.id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("/company")
async def get_company(user: User = Depends(get_current_user)) -> dict:
    company = fetch_company(user.id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.post("/onboarding")
async def complete_onboarding(
    request: OnboardingRequest,
    user: User = Depends(get_current_user),
) -> dict:
    """Save the onboarding wizard: profile names and the company upsert.

    Args:
        request: Onboarding fields (company name required)
        user: Authenticated user

    Returns:
        Updated profile and company
    """
    data = OnboardingData(
        company=request.company,
        first_name=request.first_name,
        last_name=request.last_name,
        business_type=request.business_type,
        region=request.region,
        currency=request.currency,
        fiscal_year_start=request.fiscal_year_start or date.today(),
    )
    try:
        data.validate()
    except OnboardingError as e:
        raise HTTPException(status_code=400, detail=str(e))

    execute_update("profiles", data.profile_update(), {"id": user.id})

    record = data.company_record(user.id)
    columns = ", ".join(record)
    placeholders = ", ".join(f":{k}" for k in record)
    updates = ", ".join(f"{k} = EXCLUDED.{k}" for k in record if k != "owner_id")
    rows = execute_query(
        f"""
        INSERT INTO companies ({columns}) VALUES ({placeholders})
        ON CONFLICT (owner_id) DO UPDATE SET {updates}, updated_at = now()
        RETURNING id::text, name
        """,
        record,
    )

    logger.info(f"Onboarding completed for {user.id}")
    return {
        "profile": data.profile_update(),
        "company": rows[0] if rows else None,
    }


@router.get("/navigation")
async def get_navigation(
    path: str | None = Query(None),
    user: User = Depends(get_current_user),
) -> dict:
    """Sidebar items and the account badge."""
    name = display_name(fetch_profile(user.id))
    return {
        "items": [i.to_dict(path) for i in visible_items(user.is_admin_user, signed_in=True)],
        "display_name": name,
        "initials": initials(name),
    }
