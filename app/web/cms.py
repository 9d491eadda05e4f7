"""
Server-rendered CMS pages.

All pages live under a locale prefix (``/en/cms/...``, ``/pl/cms/...``) and,
apart from the login form, require an admin session cookie.
"""

import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.core.auth import AuthContext, JWTHandler
from app.api.core.i18n import LOCALE_COOKIE_NAME, translate
from app.api.db.database import get_db
from app.api.utils.auth_token import revoke_jwt_token
from app.api.utils.exceptions import (
    InvalidCredentialsException,
    InvalidPaginationException,
    ProductNotFoundException,
    StorefrontException,
)
from app.api.utils.pagination import PaginatedResponse, PaginationParams
from app.api.v1.schemas.product import ProductResponse
from app.api.v1.services.auth import AuthService
from app.api.v1.services.product import ProductService
from app.web.auth import cms_login_url, get_cms_auth, require_cms_admin, valid_locale
from app.web.table import Column, ListPage, ProductsListState
from app.web.templates import templates
from config import settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/{locale}", tags=["CMS"], include_in_schema=False)


def product_columns(locale: str) -> list[Column]:
    """Columns of the CMS product table."""
    def format_price(value, row) -> str:
        return "" if value is None else f"{Decimal(str(value)):.2f}"

    def format_flag(value, row) -> str:
        return translate("common.yes" if value else "common.no", locale)

    def format_timestamp(value, row) -> str:
        return value.strftime("%Y-%m-%d %H:%M") if value else ""

    return [
        Column(key="name", label=translate("product.name", locale)),
        Column(key="sku", label=translate("product.sku", locale), width="160px"),
        Column(key="price", label=translate("product.price", locale), width="120px", render=format_price),
        Column(key="stock", label=translate("product.stock", locale), width="100px"),
        Column(key="category", label=translate("product.category", locale)),
        Column(key="is_active", label=translate("product.isActive", locale), width="100px", render=format_flag),
        Column(key="updated_at", label=translate("product.updatedAt", locale), render=format_timestamp),
    ]


def safe_next_url(locale: str, next_url: Optional[str]) -> str:
    """Only follow ``next`` back into this locale's CMS."""
    if next_url and next_url.startswith(f"/{locale}/cms/") and not next_url.startswith("//"):
        return next_url
    return f"/{locale}/cms/products"


@router.get("")
async def storefront_home(request: Request, locale: str = Depends(valid_locale)):
    """Storefront landing page; non-admins are sent here from the CMS."""
    return templates.TemplateResponse(
        request,
        "home.html",
        {"locale": locale},
    )


@router.get("/cms/login")
async def login_page(
    request: Request,
    locale: str = Depends(valid_locale),
    next_url: Optional[str] = Query(default=None, alias="next"),
):
    auth = await get_cms_auth(request)
    if auth is not None and auth.is_admin:
        return RedirectResponse(url=safe_next_url(locale, next_url), status_code=status.HTTP_303_SEE_OTHER)

    return templates.TemplateResponse(
        request,
        "cms/login.html",
        {"locale": locale, "next": next_url or "", "error": None, "email": ""},
    )


@router.post("/cms/login")
async def login_submit(
    request: Request,
    locale: str = Depends(valid_locale),
    email: str = Form(...),
    password: str = Form(...),
    next_url: str = Form(default="", alias="next"),
    session: AsyncSession = Depends(get_db),
):
    """
    Check the admin's credentials and start a cookie session.

    Bad credentials and non-admin accounts re-render the form.
    """
    def form_error(message: str, status_code: int):
        return templates.TemplateResponse(
            request,
            "cms/login.html",
            {"locale": locale, "next": next_url, "error": message, "email": email},
            status_code=status_code,
        )

    try:
        user = await AuthService.authenticate(email, password, session)
    except InvalidCredentialsException:
        return form_error(translate("cms.login.invalid", locale), status.HTTP_401_UNAUTHORIZED)

    if not user.is_admin:
        logger.warning(f"Non-admin user {user.email} tried to log in to the CMS")
        return form_error(translate("common.errors.forbidden", locale), status.HTTP_403_FORBIDDEN)

    token = JWTHandler.create_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
        expires_in_hours=settings.JWT_EXPIRY_HOURS,
    )
    logger.info(f"Admin {user.email} logged in to the CMS")

    response = RedirectResponse(url=safe_next_url(locale, next_url), status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_EXPIRY_HOURS * 3600,
    )
    response.set_cookie(key=LOCALE_COOKIE_NAME, value=locale, samesite="lax")
    return response


@router.get("/cms/logout")
async def logout(request: Request, locale: str = Depends(valid_locale)):
    """Revoke the session token and clear the cookie."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        try:
            await revoke_jwt_token(token)
        except StorefrontException as e:
            logger.info(f"CMS logout with unusable token: {e.error_code}")
        except Exception as e:
            logger.error(f"CMS logout failed to revoke token: {str(e)}", exc_info=True)

    response = RedirectResponse(url=cms_login_url(locale), status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/cms/products")
async def products_page(
    request: Request,
    locale: str = Depends(valid_locale),
    page: Optional[str] = Query(default=None),
    page_size: Optional[str] = Query(default=None, alias="pageSize"),
    auth: AuthContext = Depends(require_cms_admin),
    session: AsyncSession = Depends(get_db),
):
    """
    Product table, paged on the server.

    Unusable ``page``/``pageSize`` values fall back to the first page of ten.
    """
    try:
        params = PaginationParams.from_query(page, page_size)
    except InvalidPaginationException:
        logger.info(f"Ignoring invalid CMS paging page={page!r} pageSize={page_size!r}")
        params = PaginationParams()

    async def fetch(page_number: int, size: int) -> ListPage:
        query = PaginationParams(page=page_number, page_size=size)
        products, total = await ProductService.list_products(
            limit=query.limit,
            offset=query.offset,
            session=session,
        )
        body = PaginatedResponse[ProductResponse].create(
            items=[ProductResponse.model_validate(product) for product in products],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
        return ListPage.from_response({
            "data": [item.model_dump() for item in body.data],
            "pagination": body.pagination.model_dump(by_alias=True),
        })

    state = ProductsListState(page=params.page, page_size=params.page_size)
    await state.load(fetch)

    table = state.table_controller(product_columns(locale)).render(
        state.rows,
        is_loading=state.is_loading,
        error=translate("api.product.fetchFailed", locale) if state.error else None,
        locale=locale,
    )

    return templates.TemplateResponse(
        request,
        "cms/products.html",
        {
            "locale": locale,
            "auth": auth,
            "table": table,
            "detail_base": f"/{locale}/cms/products/",
        },
        status_code=status.HTTP_200_OK if state.error is None else status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.get("/cms/products/{product_id}")
async def product_detail_page(
    request: Request,
    product_id: str,
    locale: str = Depends(valid_locale),
    auth: AuthContext = Depends(require_cms_admin),
    session: AsyncSession = Depends(get_db),
):
    try:
        product = await ProductService.get_product(product_id, session)
    except ProductNotFoundException:
        return templates.TemplateResponse(
            request,
            "cms/product_detail.html",
            {"locale": locale, "auth": auth, "product": None},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return templates.TemplateResponse(
        request,
        "cms/product_detail.html",
        {"locale": locale, "auth": auth, "product": ProductResponse.model_validate(product)},
    )
