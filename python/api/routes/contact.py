"""
Contact API Routes
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from contact import ContactConfigError, ContactDeliveryError, ContactError, ContactMessage, send_contact

router = APIRouter(prefix="/contact", tags=["contact"])


class ContactRequest(BaseModel):
    """Contact form submission."""

    email: str = ""
    message: str = ""
    name: str | None = None
    source: str | None = None
    plan: str | None = None


@router.post("")
async def submit_contact(request: ContactRequest) -> dict:
    """Forward a contact form submission to support. No sign-in needed."""
    try:
        send_contact(ContactMessage(**request.model_dump()))
    except ContactError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ContactConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ContactDeliveryError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {"ok": True}
