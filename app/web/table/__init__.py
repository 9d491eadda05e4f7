from app.web.table.controller import (
    Column,
    ClientPaging,
    PaginationDescriptor,
    ServerPaging,
    SortState,
    TableConfigurationError,
    TableController,
    TableView,
)
from app.web.table.products_list import ListPage, ProductsListClient, ProductsListError, ProductsListState
from app.web.table.service import SortOrder, clamp_page, is_valid_page, page_slice, sort_rows, toggle_order, total_pages

__all__ = [
    "Column",
    "ClientPaging",
    "PaginationDescriptor",
    "ServerPaging",
    "SortState",
    "TableConfigurationError",
    "TableController",
    "TableView",
    "ListPage",
    "ProductsListClient",
    "ProductsListError",
    "ProductsListState",
    "SortOrder",
    "clamp_page",
    "is_valid_page",
    "page_slice",
    "sort_rows",
    "toggle_order",
    "total_pages",
]
