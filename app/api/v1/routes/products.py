"""
Product catalog routes.

Listing and detail lookups are public; creating and deleting products
requires an admin token.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.core.auth import AuthContext, require_admin
from app.api.core.i18n import get_locale_from_request, translate
from app.api.db.database import get_db
from app.api.utils.exceptions import (
    InvalidPaginationException,
    ProductAlreadyExistsException,
    ProductNotFoundException,
)
from app.api.utils.pagination import PaginatedResponse, PaginationParams
from app.api.utils.response import error_response, success_response
from app.api.v1.schemas.product import ProductCreatedResponse, ProductCreateRequest, ProductResponse
from app.api.v1.schemas.response import SuccessResponseModel
from app.api.v1.services.product import ProductService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["Products"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponseModel[ProductCreatedResponse]
)
async def create_product(
    request: Request,
    payload: ProductCreateRequest,
    auth: AuthContext = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Create a new product.

    Args:
        request (Request): FastAPI request object
        payload (ProductCreateRequest): Product fields
        auth (AuthContext): Admin authentication context
        session (AsyncSession): Database session

    Returns:
        JSONResponse: Response with the new product ID
    """
    locale = get_locale_from_request(request)
    try:
        product = await ProductService.create_product(payload, session)

        logger.info(f"Product {product.sku} created by {auth.email}")

        return success_response(
            status_code=status.HTTP_201_CREATED,
            message=translate("api.product.created", locale),
            data=ProductCreatedResponse(id=product.id, sku=product.sku).model_dump()
        )
    except ProductAlreadyExistsException as e:
        return error_response(
            status_code=e.status_code,
            message=e.message,
            detail=e.error_code
        )
    except Exception as e:
        logger.error(f"Product creation failed: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=translate("api.product.creationFailed", locale),
            detail="PRODUCT_CREATION_FAILED"
        )


@router.get(
    "/list",
    status_code=status.HTTP_200_OK,
    response_model=PaginatedResponse[ProductResponse]
)
async def list_products(
    request: Request,
    page: Optional[str] = Query(default=None, description="Page number (starting from 1)"),
    page_size: Optional[str] = Query(default=None, alias="pageSize", description="Items per page (1-100)"),
    session: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    List non-deleted products, most recently updated first.

    Pagination values are validated before any database access; invalid
    values are answered with 400.

    Args:
        request (Request): FastAPI request object
        page (str, optional): Page number, defaults to 1
        page_size (str, optional): Page size, defaults to 10
        session (AsyncSession): Database session

    Returns:
        JSONResponse: ``{"data": [...], "pagination": {...}}``
    """
    locale = get_locale_from_request(request)
    try:
        params = PaginationParams.from_query(page, page_size)
    except InvalidPaginationException as e:
        logger.warning(f"Rejected product list query page={page!r} pageSize={page_size!r}")
        return error_response(
            status_code=e.status_code,
            message=e.message,
            detail=e.error_code,
            errors=e.details.get("errors"),
        )

    try:
        products, total = await ProductService.list_products(
            limit=params.limit,
            offset=params.offset,
            session=session,
        )
    except Exception as e:
        logger.error(f"Error fetching products: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=translate("api.product.fetchFailed", locale),
            detail="PRODUCTS_FETCH_FAILED"
        )

    body = PaginatedResponse[ProductResponse].create(
        items=[ProductResponse.model_validate(product) for product in products],
        total=total,
        page=params.page,
        page_size=params.page_size,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
    )


@router.get(
    "/{product_id}",
    status_code=status.HTTP_200_OK,
    response_model=SuccessResponseModel[ProductResponse]
)
async def get_product(
    request: Request,
    product_id: str,
    session: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Get a product by ID. Soft-deleted products are still returned.

    Args:
        request (Request): FastAPI request object
        product_id (str): Product UUID
        session (AsyncSession): Database session

    Returns:
        JSONResponse: Response with the product
    """
    locale = get_locale_from_request(request)
    try:
        product = await ProductService.get_product(product_id, session)

        return success_response(
            status_code=status.HTTP_200_OK,
            message="Product retrieved successfully",
            data=ProductResponse.model_validate(product).model_dump()
        )
    except ProductNotFoundException:
        return error_response(
            status_code=status.HTTP_404_NOT_FOUND,
            message=translate("api.product.notFound", locale),
            detail="PRODUCT_NOT_FOUND"
        )
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=translate("api.product.fetchFailed", locale),
            detail="PRODUCT_FETCH_FAILED"
        )


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_200_OK,
    response_model=SuccessResponseModel[dict]
)
async def delete_product(
    request: Request,
    product_id: str,
    auth: AuthContext = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Soft-delete a product.

    Args:
        request (Request): FastAPI request object
        product_id (str): Product UUID
        auth (AuthContext): Admin authentication context
        session (AsyncSession): Database session

    Returns:
        JSONResponse: Response with confirmation
    """
    locale = get_locale_from_request(request)
    try:
        await ProductService.delete_product(product_id, session)

        logger.info(f"Product {product_id} deleted by {auth.email}")

        return success_response(
            status_code=status.HTTP_200_OK,
            message=translate("api.product.deleted", locale),
            data={"product_id": product_id, "status": "deleted"}
        )
    except ProductNotFoundException:
        return error_response(
            status_code=status.HTTP_404_NOT_FOUND,
            message=translate("api.product.notFound", locale),
            detail="PRODUCT_NOT_FOUND"
        )
    except Exception as e:
        logger.error(f"Error deleting product {product_id}: {str(e)}", exc_info=True)
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=translate("api.product.deletionFailed", locale),
            detail="PRODUCT_DELETION_FAILED"
        )
