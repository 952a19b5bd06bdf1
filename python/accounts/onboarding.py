"""
Onboarding Module

Validates the onboarding wizard submission and turns it into the profile
update and company upsert payloads.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"


class OnboardingError(ValueError):
    """Raised when onboarding data is incomplete."""


def join_display_name(first_name: str | None, last_name: str | None) -> str | None:
    """'First Last' from the non-empty parts, or None."""
    name = " ".join(p for p in (first_name, last_name) if p).strip()
    return name or None


@dataclass
class OnboardingData:
    """Fields collected by the onboarding wizard."""

    company: str
    first_name: str = ""
    last_name: str = ""
    business_type: str = ""
    region: str = ""
    currency: str = DEFAULT_CURRENCY
    fiscal_year_start: date | None = field(default_factory=date.today)

    def validate(self) -> None:
        if not (self.company or "").strip():
            raise OnboardingError("Please enter your company name")

    def profile_update(self) -> dict:
        """Column values for the profiles row."""
        return {
            "first_name": self.first_name or None,
            "last_name": self.last_name or None,
            "display_name": join_display_name(self.first_name, self.last_name),
        }

    def company_record(self, owner_id: str) -> dict:
        """Column values for the companies upsert (keyed on owner_id)."""
        return {
            "owner_id": owner_id,
            "name": self.company.strip(),
            "business_type": self.business_type or None,
            "region": self.region or None,
            "currency": self.currency or None,
            "fiscal_year_start": self.fiscal_year_start,
        }
