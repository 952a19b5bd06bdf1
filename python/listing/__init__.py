"""
Listing Helpers Module

Client-side pagination and search filtering for list views.
"""

from .pagination import Page, Paginator, paginate
from .filters import matches_search, filter_records

__all__ = [
    "Page",
    "Paginator",
    "paginate",
    "matches_search",
    "filter_records",
]
