"""
Search filtering for customer/vendor/inventory lists.
"""

from typing import Any, Iterable

DEFAULT_SEARCH_FIELDS = ("name", "phone")


def matches_search(
    record: dict[str, Any],
    query: str | None,
    fields: Iterable[str] = DEFAULT_SEARCH_FIELDS,
) -> bool:
    """Case-insensitive substring match of query against any of the fields.

    An empty or whitespace-only query matches every record.
    """
    q = (query or "").strip().lower()
    if not q:
        return True

    for name in fields:
        value = record.get(name)
        if value is not None and q in str(value).lower():
            return True

    return False


def filter_records(
    records: Iterable[dict[str, Any]] | None,
    query: str | None,
    fields: Iterable[str] = DEFAULT_SEARCH_FIELDS,
) -> list[dict[str, Any]]:
    fields = tuple(fields)
    return [r for r in (records or []) if matches_search(r, query, fields)]
