"""
Server-paged product list for CMS tables.

``ProductsListClient`` calls ``GET /api/v1/products/list``;
``ProductsListState`` owns the page, page size and last loaded rows that a
server-mode ``TableController`` displays.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Sequence

import httpx

from app.web.table.controller import Column, PaginationDescriptor, TableController
from config import settings

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch products"


class ProductsListError(Exception):
    """Raised when the product list endpoint answers with an error."""

    def __init__(self, message: str = FETCH_FAILED_MESSAGE, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class ListPage:
    """One page of a server-side list."""

    data: List[Any]
    pagination: PaginationDescriptor

    @classmethod
    def from_response(cls, body: dict) -> "ListPage":
        return cls(
            data=list(body.get("data") or []),
            pagination=PaginationDescriptor.from_dict(body["pagination"]),
        )


Fetch = Callable[[int, int], Awaitable[ListPage]]


class ProductsListClient:
    """
    HTTP client for the product list endpoint.

    Args:
        base_url (str): Root URL of the API server
        timeout (float): Request timeout in seconds
        transport (httpx.AsyncBaseTransport, optional): Custom transport, e.g. for tests
    """

    def __init__(
        self,
        base_url: str = settings.APP_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_products_list(self, page: int = 1, page_size: int = settings.PRODUCTS_DEFAULT_PAGE_SIZE) -> ListPage:
        """
        Fetch one page of products.

        Args:
            page (int): Page number
            page_size (int): Items per page

        Returns:
            ListPage: Rows and pagination descriptor

        Raises:
            ProductsListError: If the request fails or the server answers with an error
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                resp = await client.get(
                    f"{settings.API_V1_PREFIX}/products/list",
                    params={"page": page, "pageSize": page_size},
                )
        except httpx.HTTPError as e:
            logger.error(f"Product list request failed: {str(e)}", exc_info=True)
            raise ProductsListError(FETCH_FAILED_MESSAGE)

        if resp.is_error:
            message = FETCH_FAILED_MESSAGE
            try:
                message = resp.json().get("message") or message
            except ValueError:
                pass
            logger.warning(f"Product list returned {resp.status_code}: {message}")
            raise ProductsListError(message, status_code=resp.status_code)

        return ListPage.from_response(resp.json())

    async def __call__(self, page: int, page_size: int) -> ListPage:
        return await self.get_products_list(page, page_size)


@dataclass
class ProductsListState:
    """
    Page state for a server-paged product table.

    Every request gets a token from ``begin_request``; only the response to
    the most recent token is applied, so a slow earlier response cannot
    overwrite a newer page. A failed request keeps the rows already shown.
    """

    page: int = 1
    page_size: int = settings.PRODUCTS_DEFAULT_PAGE_SIZE
    rows: List[Any] = field(default_factory=list)
    pagination: Optional[PaginationDescriptor] = None
    is_loading: bool = False
    error: Optional[str] = None
    _latest_token: int = field(default=0, repr=False)

    def __post_init__(self):
        if self.pagination is None:
            self.pagination = PaginationDescriptor(page=self.page, page_size=self.page_size, total=0, total_pages=0)

    def set_page(self, page: int) -> None:
        self.page = page

    def set_page_size(self, page_size: int) -> None:
        self.page_size = page_size
        self.page = 1

    def begin_request(self) -> int:
        self._latest_token += 1
        self.is_loading = True
        self.error = None
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def apply_response(self, token: int, result: ListPage) -> bool:
        """
        Show ``result`` if it answers the latest request.

        Returns:
            bool: False when the response is stale and was discarded
        """
        if not self.is_current(token):
            logger.debug(f"Discarding stale product list response {token} (latest {self._latest_token})")
            return False
        self.rows = list(result.data)
        self.pagination = result.pagination
        self.page = result.pagination.page
        self.is_loading = False
        return True

    def apply_error(self, token: int, message: str) -> bool:
        """
        Record a failed request, keeping the last rows on screen.

        Returns:
            bool: False when the error belongs to a stale request
        """
        if not self.is_current(token):
            logger.debug(f"Discarding stale product list error {token} (latest {self._latest_token})")
            return False
        self.error = message
        self.is_loading = False
        return True

    async def load(self, fetch: Fetch) -> bool:
        """
        Fetch the current page with ``fetch(page, page_size)`` and apply the result.

        Returns:
            bool: Whether the result (or error) was applied
        """
        token = self.begin_request()
        try:
            result = await fetch(self.page, self.page_size)
        except ProductsListError as e:
            return self.apply_error(token, e.message)
        except Exception as e:
            logger.error(f"Product list fetch failed: {str(e)}", exc_info=True)
            return self.apply_error(token, FETCH_FAILED_MESSAGE)
        return self.apply_response(token, result)

    def table_controller(self, columns: Sequence[Column], row_id_key: str = "id") -> TableController:
        """Build a server-mode table wired to this state's page callbacks."""
        return TableController.from_props(
            columns,
            pagination=self.pagination,
            on_page_change=self.set_page,
            on_page_size_change=self.set_page_size,
            row_id_key=row_id_key,
        )
