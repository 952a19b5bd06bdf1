"""
Navigation Module

Sidebar items and account badge for the application shell.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NavItem:
    title: str
    url: str
    admin_only: bool = False
    signed_in_only: bool = False

    def to_dict(self, current_path: str | None = None) -> dict:
        return {"title": self.title, "url": self.url, "active": self.url == current_path}


NAV_ITEMS = (
    NavItem("Dashboard", "/dashboard"),
    NavItem("Invoices", "/invoices"),
    NavItem("Expenses", "/expenses"),
    NavItem("Reports", "/reports"),
    NavItem("Admin", "/admin", admin_only=True),
    NavItem("Pricing", "/pricing"),
)

ACCOUNT_ITEMS = (
    NavItem("Settings", "/settings", signed_in_only=True),
)


def visible_items(is_admin: bool, signed_in: bool = True) -> list[NavItem]:
    """Navigation items the user may see."""
    items = [i for i in NAV_ITEMS if is_admin or not i.admin_only]
    items += [i for i in ACCOUNT_ITEMS if signed_in or not i.signed_in_only]
    return items


def display_name(profile: dict | None) -> str:
    """display_name, else 'first last', else 'Account'."""
    profile = profile or {}
    explicit = (profile.get("display_name") or "").strip()
    if explicit:
        return explicit
    joined = " ".join(p for p in (profile.get("first_name"), profile.get("last_name")) if p).strip()
    return joined or "Account"


def initials(name: str) -> str:
    """Up to two uppercase initials; 'U' when there are none."""
    letters = "".join(word[0] for word in name.split(" ") if word)[:2].upper()
    return letters or "U"
