"""
Table controller for CMS list pages.

A controller runs in one of two modes, chosen when it is built:

* ``ClientPaging``: the controller holds the whole collection and sorts and
  slices it locally.
* ``ServerPaging``: the rows are already one page of a server-side list; the
  controller only displays them and forwards navigation to callbacks.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

from app.api.core.i18n import DEFAULT_LOCALE, translate
from app.web.table.service import (
    SortOrder,
    clamp_page,
    get_field,
    page_slice,
    sort_rows,
    toggle_order,
    total_pages,
)

logger = logging.getLogger(__name__)

PAGE_SIZE_OPTIONS = (10, 25, 50, 100)

SORT_INDICATORS = {
    None: "↕",
    SortOrder.ASC: "↑",
    SortOrder.DESC: "↓",
}

STATUS_LOADING = "loading"
STATUS_EMPTY = "empty"
STATUS_ROWS = "rows"


class TableConfigurationError(ValueError):
    """Raised when a table is given an inconsistent set of paging options."""


@dataclass(frozen=True)
class Column:
    """
    Column descriptor.

    Attributes:
        key: Row field shown in the column
        label: Header text
        sortable: Whether clicking the header sorts by this column
        width: Optional CSS width hint
        render: Optional ``render(value, row) -> str`` cell formatter
    """

    key: str
    label: str
    sortable: bool = False
    width: Optional[str] = None
    render: Optional[Callable[[Any, Any], str]] = None

    def format(self, row: Any) -> str:
        value = get_field(row, self.key)
        if self.render is not None:
            return self.render(value, row)
        if value is None:
            return ""
        return str(value)


@dataclass
class SortState:
    sort_key: Optional[str] = None
    sort_order: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class PaginationDescriptor:
    """Page metadata delivered by a server-side list."""

    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaginationDescriptor":
        """
        Build a descriptor from a wire ``pagination`` object.

        Accepts both camelCase (``pageSize``, ``totalPages``) and snake_case keys.
        """
        def pick(camel: str, snake: str) -> int:
            value = data.get(camel, data.get(snake))
            if value is None:
                raise TableConfigurationError(f"Pagination is missing '{camel}'")
            return int(value)

        return cls(
            page=int(data["page"]),
            page_size=pick("pageSize", "page_size"),
            total=int(data["total"]),
            total_pages=pick("totalPages", "total_pages"),
        )


@dataclass
class ClientPaging:
    """Local paging state for a fully loaded collection."""

    page_size: int = 10
    current_page: int = 1
    on_items_per_page_change: Optional[Callable[[int], Any]] = None


@dataclass
class ServerPaging:
    """Server-side paging: display ``descriptor``, forward navigation to the callbacks."""

    descriptor: PaginationDescriptor
    on_page_change: Callable[[int], Any]
    on_page_size_change: Callable[[int], Any]


PagingMode = Union[ClientPaging, ServerPaging]


@dataclass(frozen=True)
class HeaderCell:
    key: str
    label: str
    sortable: bool
    width: Optional[str]
    is_sorted: bool
    sort_indicator: Optional[str]


@dataclass(frozen=True)
class RowView:
    row_id: Any
    cells: Tuple[str, ...]
    row: Any


@dataclass(frozen=True)
class TableFooter:
    current_page: int
    total_pages: int
    page_size: int
    previous_page: int
    next_page: int
    has_previous: bool
    has_next: bool
    page_size_options: Tuple[int, ...] = PAGE_SIZE_OPTIONS


@dataclass(frozen=True)
class TableView:
    """Everything a template needs to draw one table."""

    status: str
    headers: Tuple[HeaderCell, ...] = ()
    rows: Tuple[RowView, ...] = ()
    footer: Optional[TableFooter] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == STATUS_LOADING

    @property
    def is_empty(self) -> bool:
        return self.status == STATUS_EMPTY


def build_footer(page: int, pages: int, page_size: int) -> TableFooter:
    return TableFooter(
        current_page=page,
        total_pages=pages,
        page_size=page_size,
        previous_page=max(min(page - 1, pages), 1),
        next_page=min(page + 1, pages) if pages else page,
        has_previous=page > 1,
        has_next=page < pages,
    )


class TableController:
    """
    Sorting and paging state of one table.

    Args:
        columns (Sequence[Column]): Column descriptors
        mode (ClientPaging | ServerPaging): Paging mode
        row_id_key (str): Row field used as the row identifier
    """

    def __init__(self, columns: Sequence[Column], mode: Optional[PagingMode] = None, row_id_key: str = "id"):
        self.columns = tuple(columns)
        self.mode = mode if mode is not None else ClientPaging()
        self.row_id_key = row_id_key
        self.sort = SortState()

    @classmethod
    def from_props(
        cls,
        columns: Sequence[Column],
        pagination: Optional[Union[PaginationDescriptor, Mapping[str, Any]]] = None,
        on_page_change: Optional[Callable[[int], Any]] = None,
        on_page_size_change: Optional[Callable[[int], Any]] = None,
        items_per_page: int = 10,
        on_items_per_page_change: Optional[Callable[[int], Any]] = None,
        row_id_key: str = "id",
    ) -> "TableController":
        """
        Pick the paging mode from the options supplied.

        All three server options select server mode, none of them selects
        client mode, anything in between is rejected.

        Raises:
            TableConfigurationError: If only some of the server options are given
        """
        server_props = {
            "pagination": pagination,
            "on_page_change": on_page_change,
            "on_page_size_change": on_page_size_change,
        }
        supplied = [name for name, value in server_props.items() if value is not None]

        if not supplied:
            mode = ClientPaging(page_size=items_per_page, on_items_per_page_change=on_items_per_page_change)
            return cls(columns, mode, row_id_key=row_id_key)

        if len(supplied) != len(server_props):
            missing = sorted(set(server_props) - set(supplied))
            raise TableConfigurationError(
                f"Server paging needs pagination, on_page_change and on_page_size_change; missing: {', '.join(missing)}"
            )

        if not isinstance(pagination, PaginationDescriptor):
            pagination = PaginationDescriptor.from_dict(pagination)
        mode = ServerPaging(
            descriptor=pagination,
            on_page_change=on_page_change,
            on_page_size_change=on_page_size_change,
        )
        return cls(columns, mode, row_id_key=row_id_key)

    @property
    def is_server_mode(self) -> bool:
        return isinstance(self.mode, ServerPaging)

    def _column(self, key: str) -> Optional[Column]:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    def update_pagination(self, descriptor: PaginationDescriptor) -> None:
        """Replace the server descriptor after a new page has been loaded."""
        if not isinstance(self.mode, ServerPaging):
            raise TableConfigurationError("Only server paging has a pagination descriptor")
        self.mode.descriptor = descriptor

    def sort_by(self, column_key: str) -> bool:
        """
        Handle a click on a column header.

        Returns:
            bool: False when the column is unknown or not sortable (nothing changes)
        """
        column = self._column(column_key)
        if column is None or not column.sortable:
            return False

        if self.sort.sort_key == column_key:
            self.sort.sort_order = toggle_order(self.sort.sort_order)
        else:
            self.sort = SortState(sort_key=column_key, sort_order=SortOrder.ASC)

        if isinstance(self.mode, ClientPaging):
            self.mode.current_page = 1

        logger.debug(f"Table sorted by {column_key} {self.sort.sort_order.value}")
        return True

    def go_to_page(self, page: int) -> Any:
        if isinstance(self.mode, ServerPaging):
            return self.mode.on_page_change(page)
        self.mode.current_page = page
        return None

    def change_page_size(self, size: int) -> Any:
        if isinstance(self.mode, ServerPaging):
            return self.mode.on_page_size_change(size)
        self.mode.page_size = size
        self.mode.current_page = 1
        if self.mode.on_items_per_page_change is not None:
            self.mode.on_items_per_page_change(size)
        return None

    def _headers(self) -> Tuple[HeaderCell, ...]:
        headers = []
        for column in self.columns:
            is_sorted = column.sortable and self.sort.sort_key == column.key
            if not column.sortable:
                indicator = None
            elif is_sorted:
                indicator = SORT_INDICATORS[self.sort.sort_order]
            else:
                indicator = SORT_INDICATORS[None]
            headers.append(HeaderCell(
                key=column.key,
                label=column.label,
                sortable=column.sortable,
                width=column.width,
                is_sorted=is_sorted,
                sort_indicator=indicator,
            ))
        return tuple(headers)

    def _row_views(self, rows: Sequence[Any], offset: int = 0) -> Tuple[RowView, ...]:
        views = []
        for index, row in enumerate(rows):
            row_id = get_field(row, self.row_id_key)
            views.append(RowView(
                row_id=row_id if row_id is not None else offset + index,
                cells=tuple(column.format(row) for column in self.columns),
                row=row,
            ))
        return tuple(views)

    def render(
        self,
        rows: Sequence[Any],
        is_loading: bool = False,
        error: Optional[str] = None,
        empty_message: Optional[str] = None,
        loading_message: Optional[str] = None,
        locale: str = DEFAULT_LOCALE,
    ) -> TableView:
        """
        Build the view for ``rows``.

        In client mode ``rows`` is the whole collection; in server mode it is
        the current page exactly as delivered.

        Args:
            rows (Sequence): Row mappings or objects; never modified
            is_loading (bool): Show only the loading placeholder
            error (str, optional): Error text shown alongside the rows
            empty_message (str, optional): Placeholder when there are no rows
            loading_message (str, optional): Placeholder while loading
            locale (str): Locale of the default placeholders

        Returns:
            TableView: Render-ready table
        """
        if is_loading:
            return TableView(
                status=STATUS_LOADING,
                message=loading_message or translate("table.loading", locale),
                error=error,
            )

        rows = list(rows)
        footer = None
        if isinstance(self.mode, ServerPaging):
            descriptor = self.mode.descriptor
            # Follows the server total, so a page past the end keeps its pager
            if descriptor.total > 0:
                footer = build_footer(descriptor.page, descriptor.total_pages, descriptor.page_size)

        if not rows:
            return TableView(
                status=STATUS_EMPTY,
                message=empty_message or translate("table.empty", locale),
                footer=footer,
                error=error,
            )

        if isinstance(self.mode, ServerPaging):
            offset = max(descriptor.page - 1, 0) * descriptor.page_size
            return TableView(
                status=STATUS_ROWS,
                headers=self._headers(),
                rows=self._row_views(rows, offset),
                footer=footer,
                error=error,
            )

        page_size = self.mode.page_size
        ordered = sort_rows(rows, self.sort.sort_key, self.sort.sort_order)
        pages = total_pages(len(ordered), page_size)
        page = clamp_page(self.mode.current_page, pages)
        visible = page_slice(ordered, page_size, page)

        return TableView(
            status=STATUS_ROWS,
            headers=self._headers(),
            rows=self._row_views(visible, (page - 1) * page_size),
            footer=build_footer(page, pages, page_size),
            error=error,
        )
