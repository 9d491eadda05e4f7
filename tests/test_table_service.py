import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import pytest

from app.web.table.service import (
    SortOrder,
    clamp_page,
    compare_values,
    is_valid_page,
    page_slice,
    sort_rows,
    toggle_order,
    total_pages,
)


@pytest.mark.parametrize("item_count", [0, 1, 9, 10, 11, 25, 100, 101])
@pytest.mark.parametrize("page_size", [1, 3, 10, 25])
def test_total_pages_is_ceiling(item_count, page_size):
    assert total_pages(item_count, page_size) == math.ceil(item_count / page_size)


def test_total_pages_empty_collection_has_no_pages():
    assert total_pages(0, 10) == 0


def test_page_slice_scenario():
    items = [1, 2, 3, 4, 5]
    assert page_slice(items, 2, 1) == [1, 2]
    assert page_slice(items, 2, 2) == [3, 4]
    assert page_slice(items, 2, 3) == [5]
    assert page_slice(items, 2, 4) == []


@pytest.mark.parametrize("length", [0, 1, 7, 10, 23])
@pytest.mark.parametrize("page_size", [1, 4, 10])
def test_pages_partition_the_collection(length, page_size):
    items = list(range(length))
    pages = [page_slice(items, page_size, page) for page in range(1, total_pages(length, page_size) + 1)]
    assert [item for page in pages for item in page] == items


def test_page_slice_returns_tail_when_page_size_exceeds_items():
    assert page_slice(["a", "b"], 10, 1) == ["a", "b"]


def test_page_slice_before_first_page_is_empty():
    assert page_slice([1, 2, 3], 2, 0) == []


def test_sort_without_key_keeps_input_order():
    rows = [{"name": "b"}, {"name": "a"}]
    result = sort_rows(rows, None, SortOrder.DESC)
    assert result == rows
    assert result is not rows


def test_sort_strings_case_insensitively():
    rows = [{"name": "charlie"}, {"name": "ALICE"}, {"name": "Bob"}]
    assert [r["name"] for r in sort_rows(rows, "name", SortOrder.ASC)] == ["ALICE", "Bob", "charlie"]
    assert [r["name"] for r in sort_rows(rows, "name", SortOrder.DESC)] == ["charlie", "Bob", "ALICE"]


def test_sort_numbers_numerically():
    rows = [{"price": 10}, {"price": 9}, {"price": Decimal("9.5")}, {"price": 100.0}]
    assert [r["price"] for r in sort_rows(rows, "price", SortOrder.ASC)] == [9, Decimal("9.5"), 10, 100.0]


@pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
def test_nulls_always_sort_last(order):
    rows = [{"v": None}, {"v": 2}, {}, {"v": 1}, {"v": 3}]
    result = sort_rows(rows, "v", order)
    values = [r.get("v") for r in result]
    assert values[-2:] == [None, None]
    expected = [1, 2, 3] if order == SortOrder.ASC else [3, 2, 1]
    assert values[:3] == expected


def test_sort_is_stable_and_does_not_mutate_input():
    rows = [
        {"id": 1, "group": "b"},
        {"id": 2, "group": "a"},
        {"id": 3, "group": "b"},
        {"id": 4, "group": "a"},
    ]
    snapshot = list(rows)

    result = sort_rows(rows, "group", SortOrder.ASC)

    assert rows == snapshot
    assert [r["id"] for r in result] == [2, 4, 1, 3]
    assert len(result) == len(rows)
    assert all(any(r is original for original in rows) for r in result)
    assert sort_rows(result, "group", SortOrder.ASC) == result


def test_sort_reads_object_attributes():
    @dataclass
    class Item:
        name: str
        rank: Optional[int] = None

    rows = [Item("b", 2), Item("a"), Item("c", 1)]
    assert [r.name for r in sort_rows(rows, "rank", SortOrder.ASC)] == ["c", "b", "a"]


def test_incomparable_values_are_treated_as_equal():
    rows = [{"v": "text"}, {"v": 3}, {"v": (1, 2)}]
    assert sort_rows(rows, "v", SortOrder.ASC) == rows


def test_compare_values_falls_back_to_operators():
    assert compare_values((1, 2), (1, 3)) == -1
    assert compare_values((2,), (1,)) == 1
    assert compare_values({1}, {2}) == 0


def test_booleans_are_not_compared_as_numbers():
    assert compare_values(True, 1) == 0


def test_toggle_order():
    assert toggle_order(SortOrder.ASC) == SortOrder.DESC
    assert toggle_order(SortOrder.DESC) == SortOrder.ASC
    assert toggle_order("asc") == SortOrder.DESC


@pytest.mark.parametrize("pages", [0, 1, 2, 5])
@pytest.mark.parametrize("page", [-3, 0, 1, 2, 3, 5, 6, 100])
def test_clamp_page_stays_in_range(page, pages):
    result = clamp_page(page, pages)
    assert 1 <= result <= max(pages, 1)
    if page < 1 or pages == 0:
        assert result == 1
    elif page > pages:
        assert result == pages
    else:
        assert result == page


def test_is_valid_page():
    assert is_valid_page(1, 3)
    assert is_valid_page(3, 3)
    assert not is_valid_page(0, 3)
    assert not is_valid_page(4, 3)
    assert not is_valid_page(1, 0)
