"""
Pytest configuration and fixtures for QuickFlow tests.
"""

import os
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
import yaml

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def config_dir() -> Path:
    """Return the config directory path."""
    return PROJECT_ROOT / "config"


@pytest.fixture
def access_control(config_dir: Path) -> dict:
    """Load the access control configuration."""
    with open(config_dir / "access_control.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def expense_categories(config_dir: Path) -> dict:
    """Load the expense category rules."""
    with open(config_dir / "expense_categories.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def sample_invoice_rows() -> list[dict]:
    """Invoice rows as returned by the database."""
    return [
        {
            "id": "inv-1",
            "customer": "Acme Corp",
            "issue_date": date(2025, 1, 10),
            "due_date": date(2025, 1, 17),
            "status": "paid",
            "total": Decimal("1200.00"),
            "created_by": "user-1",
            "created_at": datetime(2025, 1, 10, 9, 0),
        },
        {
            "id": "inv-2",
            "customer": "Globex",
            "issue_date": date(2025, 1, 20),
            "due_date": date(2025, 1, 27),
            "status": "sent",
            "total": Decimal("800.00"),
            "created_by": "user-1",
            "created_at": datetime(2025, 1, 20, 9, 0),
        },
        {
            "id": "inv-3",
            "customer": "Acme Corp",
            "issue_date": date(2025, 1, 25),
            "due_date": date(2025, 2, 1),
            "status": "draft",
            "total": Decimal("500.00"),
            "created_by": "user-1",
            "created_at": datetime(2025, 1, 25, 9, 0),
        },
    ]


@pytest.fixture
def sample_expense_rows() -> list[dict]:
    """Expense rows as returned by the database."""
    return [
        {
            "id": "exp-1",
            "date": date(2025, 1, 12),
            "vendor": "AWS",
            "amount": Decimal("300.00"),
            "category": "Cloud",
            "note": "",
            "receipt_url": None,
            "created_by": "user-1",
            "created_at": datetime(2025, 1, 12, 9, 0),
        },
        {
            "id": "exp-2",
            "date": date(2025, 1, 22),
            "vendor": "Staples",
            "amount": Decimal("200.00"),
            "category": "Office Supplies",
            "note": "Paper",
            "receipt_url": None,
            "created_by": "user-1",
            "created_at": datetime(2025, 1, 22, 9, 0),
        },
    ]


@pytest.fixture
def sample_csv_content() -> str:
    """Expense import CSV with one bad row and a blank line."""
    return """date,vendor,amount,category,note
2025-01-15,Staples,42.50,Office Supplies,Printer paper

2025-01-16,,10.00,Meals,Missing vendor
,Uber,"1,250.00",,
2025-01-18,Zero Co,0,,
"""


# Environment setup for tests
@pytest.fixture(autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ.setdefault("POSTGRES_HOST", "localhost")
    os.environ.setdefault("POSTGRES_PORT", "5432")
    os.environ.setdefault("POSTGRES_DB", "quickflow_test")
    os.environ.setdefault("POSTGRES_USER", "test")
    os.environ.setdefault("POSTGRES_PASSWORD", "test")
    os.environ.setdefault("ENVIRONMENT", "development")
    yield
