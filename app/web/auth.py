"""Cookie-based authentication for CMS pages, with redirects instead of 401/403."""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials

from app.api.core.auth import AuthContext, get_request_token, security
from app.api.core.i18n import SUPPORTED_LOCALES
from app.api.utils.auth_token import verify_jwt_token
from app.api.utils.exceptions import StorefrontException

logger = logging.getLogger(__name__)


class CmsAuthRedirect(Exception):
    """Raised when a CMS page needs a different (logged in or admin) user."""

    def __init__(self, redirect_url: str):
        self.redirect_url = redirect_url
        super().__init__("CMS authentication required")


async def cms_auth_redirect_handler(request: Request, exc: CmsAuthRedirect):
    """Redirect to the login page (or the storefront) when a CMS guard fails."""
    return RedirectResponse(url=exc.redirect_url, status_code=status.HTTP_303_SEE_OTHER)


def cms_login_url(locale: str, next_url: str = "") -> str:
    url = f"/{locale}/cms/login"
    if next_url:
        url += f"?next={quote(next_url)}"
    return url


def valid_locale(locale: str) -> str:
    """Path dependency: 404 for locales the site is not translated into."""
    if locale not in SUPPORTED_LOCALES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return locale


async def get_cms_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[AuthContext]:
    """
    Resolve the CMS session cookie (or a bearer token) into an auth context.

    Returns None if not authenticated (doesn't raise).
    """
    token = get_request_token(request, credentials)
    if not token:
        return None

    try:
        payload = await verify_jwt_token(token)
        return AuthContext.from_payload(payload)
    except StorefrontException as e:
        logger.info(f"Rejected CMS session: {e.error_code}")
        return None


async def require_cms_admin(
    request: Request,
    locale: str = Depends(valid_locale),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """
    Require an admin session for CMS pages.

    Anonymous visitors go to the login page; signed-in non-admins go back
    to the storefront.

    Raises:
        CmsAuthRedirect: If the visitor may not see the page
    """
    auth = await get_cms_auth(request, credentials)
    if auth is None:
        next_url = str(request.url.path)
        if request.url.query:
            next_url += f"?{request.url.query}"
        raise CmsAuthRedirect(cms_login_url(locale, next_url))

    if not auth.is_admin:
        logger.warning(f"Non-admin user {auth.user_id} tried to open {request.url.path}")
        raise CmsAuthRedirect(f"/{locale}")

    request.state.auth = auth
    return auth
