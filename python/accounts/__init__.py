"""
Accounts Module

Onboarding, profile display, and navigation shell helpers.
"""

from .onboarding import OnboardingData, OnboardingError, join_display_name
from .navigation import NAV_ITEMS, NavItem, display_name, initials, visible_items

__all__ = [
    "OnboardingData",
    "OnboardingError",
    "join_display_name",
    "NAV_ITEMS",
    "NavItem",
    "display_name",
    "initials",
    "visible_items",
]
