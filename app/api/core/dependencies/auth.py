"""
Authentication dependencies for FastAPI routes.

This module provides dependency functions for route protection and user authentication.
"""

import logging
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.core.auth import AuthContext, get_auth_context
from app.api.db.database import get_db
from app.api.v1.models.user import User
from app.api.v1.services.auth import AuthService
from app.api.utils.exceptions import (
    InvalidTokenException,
    UserNotFoundException,
)

logger = logging.getLogger(__name__)


async def get_current_user(
    auth: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_db)
) -> User:
    """
    Get the current authenticated user from the request token.

    Args:
        auth (AuthContext): Verified token claims
        session (AsyncSession): Database session

    Returns:
        User: Authenticated user object

    Raises:
        InvalidTokenException: If the token's user no longer exists or is banned

    Example:
        >>> @router.get("/me")
        >>> async def get_me(current_user: User = Depends(get_current_user)):
        ...     return {"email": current_user.email}
    """
    try:
        user = await AuthService.get_user_by_id(auth.user_id, session)
    except UserNotFoundException:
        logger.warning(f"Token refers to missing user: {auth.user_id}")
        raise InvalidTokenException("Invalid token: user no longer exists")

    if user.banned:
        logger.warning(f"Banned user presented a valid token: {user.email}")
        raise InvalidTokenException("Account is disabled")

    logger.debug(f"User authenticated: {user.email}")
    return user

