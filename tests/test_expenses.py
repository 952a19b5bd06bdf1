"""
Expenses Module Tests

Tests for expense records, category suggestions and CSV import.
"""

import pytest
from datetime import date
from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))

from expenses import (
    CategorySuggestion,
    Expense,
    ExpenseCategorizer,
    ExpenseCSVImporter,
    expense_template_csv,
)


class TestExpense:
    """Tests for the Expense record."""

    def test_valid_expense(self):
        expense = Expense(date=date(2025, 1, 1), vendor="AWS", amount="12.30")
        assert expense.amount == Decimal("12.30")
        assert expense.is_valid is True

    @pytest.mark.parametrize("vendor,amount", [("", 10), ("  ", 10), ("AWS", 0), ("AWS", -5)])
    def test_invalid_expense(self, vendor, amount):
        assert Expense(date=date(2025, 1, 1), vendor=vendor, amount=amount).is_valid is False

    @pytest.mark.parametrize("amount", ["NaN", "Infinity"])
    def test_non_finite_amount_invalid(self, amount):
        assert Expense(date=date(2025, 1, 1), vendor="AWS", amount=amount).is_valid is False

    def test_from_row_alternate_columns(self):
        expense = Expense.from_row({
            "id": 3,
            "expense_date": "2025-02-03",
            "payee": "Lyft",
            "amount": "18.00",
        })
        assert expense.id == "3"
        assert expense.date == date(2025, 2, 3)
        assert expense.vendor == "Lyft"
        assert expense.category == "General"

    def test_from_row_without_date(self):
        expense = Expense.from_row({"id": 4, "vendor": "AWS", "amount": "5"})
        assert expense.date is None
        assert expense.to_dict()["date"] is None

    def test_to_record_blank_note_is_null(self):
        record = Expense(date=date(2025, 1, 1), vendor="AWS", amount=5, created_by="u1").to_record()
        assert record["note"] is None
        assert record["created_by"] == "u1"


class TestExpenseCategorizer:
    """Tests for category suggestions."""

    @pytest.fixture
    def categorizer(self, config_dir):
        return ExpenseCategorizer(config_dir=config_dir, use_claude=False)

    @pytest.mark.parametrize("vendor,category,confidence", [
        ("AWS EMEA", "Cloud", 0.82),
        ("Microsoft Azure", "Cloud", 0.82),
        ("Uber Trip", "Travel", 0.76),
        ("lyft", "Travel", 0.76),
        ("Amazon Marketplace", "Office Supplies", 0.71),
        ("STAPLES #123", "Office Supplies", 0.71),
    ])
    def test_keyword_rules(self, categorizer, vendor, category, confidence):
        suggestion = categorizer.suggest(vendor, 20)
        assert suggestion.category == category
        assert suggestion.confidence == confidence
        assert suggestion.method == "rule"

    def test_keyword_beats_large_amount(self, categorizer):
        assert categorizer.suggest("AWS", 10000).category == "Cloud"

    def test_large_amount(self, categorizer):
        suggestion = categorizer.suggest("Jane Doe Design", 500.01)
        assert suggestion.category == "Contractors"
        assert suggestion.confidence == 0.66

    def test_amount_at_threshold_is_general(self, categorizer):
        suggestion = categorizer.suggest("Jane Doe Design", 500)
        assert suggestion.category == "General"
        assert suggestion.confidence == 0.55

    def test_empty_vendor(self, categorizer):
        assert categorizer.suggest("", 0).method == "fallback"

    def test_defaults_without_config_file(self, tmp_path):
        categorizer = ExpenseCategorizer(config_dir=tmp_path, use_claude=False)
        assert categorizer.suggest("gcp billing", 1).category == "Cloud"

    def test_confidence_percent(self):
        suggestion = CategorySuggestion(category="Cloud", confidence=0.82, method="rule")
        assert suggestion.confidence_percent == 82
        assert suggestion.to_dict()["confidence_percent"] == 82

    def _with_claude(self, categorizer, text):
        categorizer.use_claude = True
        categorizer.client = Mock()
        categorizer.client.messages.create.return_value = Mock(content=[Mock(text=text)])
        return categorizer

    def test_claude_replaces_generic_guess(self, categorizer):
        self._with_claude(categorizer, '```json\n{"category": "Software", "confidence": 0.9}\n```')

        suggestion = categorizer.suggest("JetBrains", 199)
        assert suggestion.category == "Software"
        assert suggestion.method == "claude"

    def test_claude_not_asked_for_keyword_match(self, categorizer):
        self._with_claude(categorizer, '{"category": "Software", "confidence": 0.99}')

        assert categorizer.suggest("AWS", 10).category == "Cloud"
        categorizer.client.messages.create.assert_not_called()

    def test_claude_unknown_category_ignored(self, categorizer):
        self._with_claude(categorizer, '{"category": "Yachts", "confidence": 0.99}')
        assert categorizer.suggest("Boat Co", 10).category == "General"

    def test_claude_failure_keeps_rule_result(self, categorizer):
        categorizer.use_claude = True
        categorizer.client = Mock()
        categorizer.client.messages.create.side_effect = RuntimeError("boom")

        suggestion = categorizer.suggest("Jane Doe Design", 900)
        assert suggestion.category == "Contractors"
        assert suggestion.method == "amount"


class TestExpenseCSVImporter:
    """Tests for CSV import."""

    def test_parse(self, sample_csv_content):
        importer = ExpenseCSVImporter(today=date(2025, 3, 1))
        result = importer.parse(sample_csv_content, created_by="user-1")

        assert result.imported == 2
        assert result.errors == 2
        assert result.error_rows == [4, 6]
        assert result.message == "Imported 2 expenses. 2 rows had errors."

        staples, uber = result.expenses
        assert staples.date == date(2025, 1, 15)
        assert staples.amount == Decimal("42.50")
        assert staples.category == "Office Supplies"
        assert staples.note == "Printer paper"
        assert staples.created_by == "user-1"

        assert uber.date == date(2025, 3, 1)
        assert uber.amount == Decimal("1250.00")
        assert uber.category == "General"
        assert uber.note == ""

    def test_message_without_errors(self):
        result = ExpenseCSVImporter().parse("date,vendor,amount\n2025-01-01,AWS,5\n")
        assert result.message == "Imported 1 expenses."
        assert result.to_dict()["errors"] == 0

    def test_bytes_with_bom(self):
        content = "﻿date,vendor,amount\n2025-01-01,AWS,5\n".encode("utf-8")
        assert ExpenseCSVImporter().parse(content).imported == 1

    def test_unparsable_amount_is_error(self):
        result = ExpenseCSVImporter().parse("date,vendor,amount\n2025-01-01,AWS,abc\n")
        assert result.imported == 0
        assert result.errors == 1

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-inf", "sNaN"])
    def test_non_finite_amount_is_error(self, amount):
        content = f"date,vendor,amount\n2025-01-01,AWS,{amount}\n2025-01-02,Lyft,8\n"
        result = ExpenseCSVImporter().parse(content)
        assert result.imported == 1
        assert result.errors == 1
        assert result.error_rows == [2]

    def test_invalid_utf8_raises(self):
        with pytest.raises(UnicodeDecodeError):
            ExpenseCSVImporter().parse(b"date,vendor,amount\n2025-01-01,Caf\xe9,10\n")

    def test_empty_content(self):
        result = ExpenseCSVImporter().parse("")
        assert result.imported == 0
        assert result.errors == 0

    def test_template(self):
        lines = expense_template_csv().splitlines()
        assert lines[0] == "date,vendor,amount,category,note"
        assert len(lines) == 2
