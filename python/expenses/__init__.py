"""
Expenses Module

Expense records, category suggestions, and CSV import.
"""

from .models import Expense
from .categorizer import ExpenseCategorizer, CategorySuggestion
from .csv_importer import ExpenseCSVImporter, ImportResult, expense_template_csv

__all__ = [
    "Expense",
    "ExpenseCategorizer",
    "CategorySuggestion",
    "ExpenseCSVImporter",
    "ImportResult",
    "expense_template_csv",
]
