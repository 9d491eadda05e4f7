"""
Paging and sorting helpers for CMS tables.

All functions are pure: they never mutate their inputs and never raise for
out-of-range page numbers (those are clamped instead).
"""

import enum
import functools
import locale
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_NUMBER_TYPES = (int, float, Decimal)


class SortOrder(str, enum.Enum):
    """Sort direction of a table column."""

    ASC = "asc"
    DESC = "desc"


def total_pages(item_count: int, page_size: int) -> int:
    """
    Number of pages needed to show ``item_count`` items.

    An empty collection has zero pages, not one empty page.

    Args:
        item_count (int): Number of items
        page_size (int): Items per page, at least 1

    Returns:
        int: ``ceil(item_count / page_size)``
    """
    if item_count <= 0:
        return 0
    return math.ceil(item_count / page_size)


def page_slice(items: Sequence[T], page_size: int, page: int) -> List[T]:
    """
    Items shown on ``page`` (1-based).

    Args:
        items (Sequence): Full collection
        page_size (int): Items per page
        page (int): Page number

    Returns:
        list: Items in ``[(page-1)*page_size, page*page_size)``; empty past the last page
    """
    start = (page - 1) * page_size
    if start < 0:
        return []
    return list(items[start:start + page_size])


def toggle_order(order: SortOrder) -> SortOrder:
    return SortOrder.DESC if SortOrder(order) == SortOrder.ASC else SortOrder.ASC


def clamp_page(page: int, pages: int) -> int:
    """
    Pull ``page`` into ``[1, pages]``.

    Returns 1 when there are no pages at all.
    """
    if page < 1 or pages == 0:
        return 1
    if page > pages:
        return pages
    return page


def is_valid_page(page: int, pages: int) -> bool:
    return 1 <= page <= pages


def get_field(row: Any, key: str) -> Any:
    """Read ``key`` from a mapping or an object; missing fields are ``None``."""
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def _is_number(value: Any) -> bool:
    return isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool)


def compare_values(a: Any, b: Any) -> int:
    """
    Three-way comparison of two non-null cell values.

    Strings compare case-insensitively using the current collation; numbers
    compare numerically. Other values fall back to ``<``/``>`` and count as
    equal when neither holds or they cannot be compared.
    """
    if isinstance(a, str) and isinstance(b, str):
        left, right = a.casefold(), b.casefold()
        result = locale.strcoll(left, right)
        if result == 0 and left != right:
            result = (left > right) - (left < right)
        return (result > 0) - (result < 0)
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        return 0
    return 0


def sort_rows(items: Iterable[T], sort_key: Optional[str], order: SortOrder = SortOrder.ASC) -> List[T]:
    """
    Return a sorted copy of ``items``.

    The sort is stable. Rows without a value for ``sort_key`` always come
    last, in both directions. With no ``sort_key`` the input order is kept.

    Args:
        items (Iterable): Rows (mappings or objects)
        sort_key (str, optional): Field to sort by
        order (SortOrder): Sort direction

    Returns:
        list: New list with the same row objects
    """
    rows = list(items)
    if sort_key is None:
        return rows

    descending = SortOrder(order) == SortOrder.DESC

    def compare(left: Any, right: Any) -> int:
        a, b = get_field(left, sort_key), get_field(right, sort_key)
        if a is None and b is None:
            return 0
        if a is None:
            return 1
        if b is None:
            return -1
        result = compare_values(a, b)
        return -result if descending else result

    return sorted(rows, key=functools.cmp_to_key(compare))
