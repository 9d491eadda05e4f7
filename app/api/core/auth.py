"""
Authentication and authorization helpers for the Storefront CMS API.

This module provides JWT token validation, request token extraction, and
role checks for authenticated requests.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.api.utils.exceptions import (
    InvalidTokenException,
    MissingAuthorizationException,
    InsufficientPermissionsException
)
from app.api.v1.models.user import UserRole
from config import settings

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


class AuthContext:
    """
    Context object containing authentication and authorization information.

    Attributes:
        user_id: UUID of the authenticated user
        email: Email of the authenticated user
        role: Role claim carried by the token
    """

    def __init__(self, user_id: UUID, email: str, role: UserRole = UserRole.CUSTOMER):
        """
        Initialize AuthContext.

        Args:
            user_id (UUID): UUID of the user
            email (str): User email address
            role (UserRole): Role of the user
        """
        self.user_id = user_id
        self.email = email
        self.role = role

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def has_role(self, role: UserRole) -> bool:
        """
        Check whether the user holds ``role``. Admins hold every role.

        Args:
            role (UserRole): Role to check

        Returns:
            bool: True if the role is granted
        """
        return self.is_admin or self.role == role

    @classmethod
    def from_payload(cls, payload: dict) -> "AuthContext":
        """
        Build a context from a verified JWT payload.

        Raises:
            InvalidTokenException: If required claims are missing or malformed
        """
        try:
            return cls(
                user_id=UUID(payload["sub"]),
                email=payload["email"],
                role=UserRole(payload.get("role", UserRole.CUSTOMER.value)),
            )
        except (KeyError, ValueError):
            logger.warning("Token payload is missing or has malformed claims")
            raise InvalidTokenException("Invalid token claims")


class JWTHandler:
    """
    Handles JWT token creation and validation.

    Thin wrapper around the token utilities so routes depend on one entry point.
    """

    @staticmethod
    def create_token(user_id: UUID, email: str, role: UserRole, expires_in_hours: int = settings.JWT_EXPIRY_HOURS) -> str:
        """
        Create a JWT token for a user.

        Args:
            user_id (UUID): User UUID
            email (str): User email
            role (UserRole): User role
            expires_in_hours (int): Token expiration time in hours

        Returns:
            str: Encoded JWT token
        """
        from app.api.utils.auth_token import create_jwt_token
        return create_jwt_token(user_id, email, UserRole(role).value, expires_in_hours)

    @staticmethod
    async def verify_token(token: str) -> dict:
        """
        Verify and decode a JWT token.

        Args:
            token (str): JWT token to verify

        Returns:
            dict: Token payload
        """
        from app.api.utils.auth_token import verify_jwt_token
        return await verify_jwt_token(token)


def get_request_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """
    Extract the session token from the Authorization header or the CMS cookie.

    Args:
        request (Request): Incoming request
        credentials (HTTPAuthorizationCredentials, optional): Parsed bearer credentials

    Returns:
        str | None: Raw token, if any
    """
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


async def get_auth_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthContext:
    """
    Extract authentication context from request.

    Args:
        request (Request): FastAPI request object
        credentials (HTTPAuthorizationCredentials, optional): Bearer token credentials

    Returns:
        AuthContext: Authenticated user context

    Raises:
        MissingAuthorizationException: If no token was sent
        InvalidTokenException, TokenExpiredException, TokenRevokedException: If the token is rejected
    """
    token = get_request_token(request, credentials)
    if not token:
        logger.warning("No valid authentication found in request")
        raise MissingAuthorizationException()

    payload = await JWTHandler.verify_token(token)
    return AuthContext.from_payload(payload)


def require_role(role: UserRole):
    """
    Dependency to require a specific role for an endpoint.

    Args:
        role (UserRole): Required role

    Returns:
        Callable: Dependency function
    """

    async def check_role(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        """
        Check if user has required role.

        Args:
            auth (AuthContext): Authentication context

        Returns:
            AuthContext: Authenticated context if the role is granted

        Raises:
            InsufficientPermissionsException: If the role is not granted
        """
        if not auth.has_role(role):
            logger.warning(f"Role '{role.value}' denied for user {auth.user_id}")
            raise InsufficientPermissionsException(f"Role '{role.value}' required")
        return auth

    return check_role


require_admin = require_role(UserRole.ADMIN)
