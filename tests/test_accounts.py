"""
Accounts Module Tests

Tests for onboarding payloads and the navigation shell.
"""

import pytest
from datetime import date
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))

from accounts import (
    OnboardingData,
    OnboardingError,
    display_name,
    initials,
    join_display_name,
    visible_items,
)
from directory import ContactRecord, DirectoryError, InventoryRecord


class TestOnboarding:
    """Tests for onboarding data."""

    def test_company_required(self):
        with pytest.raises(OnboardingError):
            OnboardingData(company="  ").validate()

    def test_profile_update(self):
        data = OnboardingData(company="Acme", first_name="Ada", last_name="")
        assert data.profile_update() == {
            "first_name": "Ada",
            "last_name": None,
            "display_name": "Ada",
        }

    def test_display_name_null_when_empty(self):
        assert join_display_name("", None) is None
        assert join_display_name("Ada", "Lovelace") == "Ada Lovelace"

    def test_company_record(self):
        data = OnboardingData(company=" Acme ", region="US", fiscal_year_start=date(2025, 1, 1))
        record = data.company_record("owner-1")

        assert record["owner_id"] == "owner-1"
        assert record["name"] == "Acme"
        assert record["currency"] == "USD"
        assert record["business_type"] is None
        assert record["fiscal_year_start"] == date(2025, 1, 1)


class TestNavigation:
    """Tests for sidebar items and the account badge."""

    def test_admin_sees_admin(self):
        titles = [i.title for i in visible_items(is_admin=True)]
        assert titles == ["Dashboard", "Invoices", "Expenses", "Reports", "Admin", "Pricing", "Settings"]

    def test_non_admin(self):
        titles = [i.title for i in visible_items(is_admin=False)]
        assert "Admin" not in titles
        assert "Settings" in titles

    def test_signed_out(self):
        assert "Settings" not in [i.title for i in visible_items(is_admin=False, signed_in=False)]

    def test_active_item(self):
        item = visible_items(False)[1]
        assert item.to_dict("/invoices") == {"title": "Invoices", "url": "/invoices", "active": True}

    @pytest.mark.parametrize("profile,expected", [
        ({"display_name": "Boss", "first_name": "Ada"}, "Boss"),
        ({"first_name": "Ada", "last_name": "Lovelace"}, "Ada Lovelace"),
        ({"last_name": "Lovelace"}, "Lovelace"),
        ({}, "Account"),
        (None, "Account"),
    ])
    def test_display_name(self, profile, expected):
        assert display_name(profile) == expected

    @pytest.mark.parametrize("name,expected", [
        ("Ada Lovelace", "AL"),
        ("ada byron lovelace", "AB"),
        ("Account", "A"),
        ("", "U"),
    ])
    def test_initials(self, name, expected):
        assert initials(name) == expected


class TestDirectoryRecords:
    """Tests for customer/vendor/inventory payloads."""

    def test_blank_fields_become_null(self):
        record = ContactRecord(name=" Acme ", email="", phone="  ", address=None).to_record("u1")
        assert record == {"name": "Acme", "email": None, "phone": None, "address": None, "created_by": "u1"}

    def test_blank_name_is_null(self):
        assert ContactRecord(name="  ", phone="555").to_record()["name"] is None

    def test_inventory_name_required(self):
        with pytest.raises(DirectoryError):
            InventoryRecord(name="").to_record()

    def test_inventory_defaults(self):
        record = InventoryRecord(name="Widget").to_record()
        assert record["stock"] == 0
        assert record["price"] is None
        assert "created_by" not in record

    def test_inventory_invalid_price(self):
        with pytest.raises(DirectoryError):
            InventoryRecord(name="Widget", price="cheap").to_record()
