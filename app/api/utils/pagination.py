"""
Pagination utilities.

This module provides reusable pagination helpers for list endpoints. The wire
format uses camelCase keys (``pageSize``, ``totalPages``) for the pagination
envelope.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field, ValidationError

from app.api.utils.exceptions import InvalidPaginationException
from config import settings

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Pagination parameters."""
    page: int = Field(default=1, ge=1, description="Page number (starting from 1)")
    page_size: int = Field(
        default=settings.PRODUCTS_DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.PRODUCTS_MAX_PAGE_SIZE,
        alias="pageSize",
        description="Items per page (max 100)",
    )

    class Config:
        populate_by_name = True

    @property
    def offset(self) -> int:
        """Calculate offset for database query."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit for database query."""
        return self.page_size

    @classmethod
    def from_query(cls, page: Optional[str], page_size: Optional[str]) -> "PaginationParams":
        """
        Build pagination parameters from raw query string values.

        Missing or empty values fall back to the defaults.

        Args:
            page (str, optional): Raw ``page`` query value
            page_size (str, optional): Raw ``pageSize`` query value

        Returns:
            PaginationParams: Validated parameters

        Raises:
            InvalidPaginationException: If a value is not an integer or is out of bounds
        """
        values = {}
        if page not in (None, ""):
            values["page"] = page
        if page_size not in (None, ""):
            values["page_size"] = page_size

        try:
            return cls(**values)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise InvalidPaginationException(details={"errors": errors})


class PaginationMeta(BaseModel):
    """Pagination descriptor returned alongside a page of items."""
    page: int
    page_size: int = Field(alias="pageSize")
    total: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response wrapper."""
    data: list[T]
    pagination: PaginationMeta

    @classmethod
    def create(cls, items: list[T], total: int, page: int, page_size: int) -> "PaginatedResponse[T]":
        """
        Create a paginated response.

        Args:
            items: List of items for current page
            total: Total number of items across all pages
            page: Current page number
            page_size: Number of items per page

        Returns:
            PaginatedResponse: Paginated response object
        """
        total_pages = (total + page_size - 1) // page_size if total > 0 else 0
        return cls(
            data=items,
            pagination=PaginationMeta(
                page=page,
                page_size=page_size,
                total=total,
                total_pages=total_pages,
            ),
        )
