"""
JWT token utilities for authentication.

This module provides functions for creating, verifying, and revoking JWT
tokens. The same token is used as an API bearer token and as the CMS
session cookie.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError, ExpiredSignatureError

from config import settings
from app.api.utils import redis_client
from app.api.utils.exceptions import (
    InvalidTokenException,
    TokenExpiredException,
    TokenRevokedException
)

logger = logging.getLogger(__name__)


def create_jwt_token(
    user_id: uuid.UUID,
    email: str,
    role: str,
    expires_in_hours: int = settings.JWT_EXPIRY_HOURS,
) -> str:
    """
    Create a JWT token for a user.

    Args:
        user_id (UUID): User UUID
        email (str): User email
        role (str): User role (``admin`` or ``customer``)
        expires_in_hours (int): Token expiration time in hours

    Returns:
        str: Encoded JWT token

    Example:
        >>> token = create_jwt_token(user.id, "admin@example.com", "admin")
        >>> len(token) > 0
        True
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + timedelta(hours=expires_in_hours),
    }

    try:
        token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        logger.info(f"JWT token created for user: {email}")
        return token
    except Exception as e:
        logger.error(f"Failed to create JWT token: {str(e)}", exc_info=True)
        raise


async def verify_jwt_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    Checks token signature, expiration, and revocation status.

    Args:
        token (str): JWT token to verify

    Returns:
        dict: Token payload

    Raises:
        TokenExpiredException: If the token has expired
        TokenRevokedException: If the token was revoked by a logout
        InvalidTokenException: If the token is malformed or badly signed
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        logger.warning(f"Expired token: {str(e)}")
        raise TokenExpiredException()
    except JWTError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise InvalidTokenException()

    jti = payload.get("jti")
    if jti and await redis_client.is_token_revoked(jti):
        logger.warning(f"Revoked token attempted to be used: {jti}")
        raise TokenRevokedException()

    logger.debug(f"JWT token verified for user: {payload.get('email')}")
    return payload


def decode_jwt_token(token: str) -> dict:
    """
    Decode JWT token without verifying the signature or expiry.

    Only used to read the ``jti``/``exp`` claims of a token being revoked.

    Args:
        token (str): JWT token to decode

    Returns:
        dict: Decoded token payload

    Raises:
        InvalidTokenException: If the token cannot be decoded at all
    """
    try:
        return jwt.decode(
            token,
            key="",
            options={"verify_signature": False, "verify_exp": False}
        )
    except JWTError as e:
        logger.warning(f"Failed to decode token: {str(e)}")
        raise InvalidTokenException()


async def revoke_jwt_token(token: str) -> dict:
    """
    Revoke a JWT token by storing its JTI in Redis.

    Stores the token's JTI in Redis with TTL matching the token's expiration.

    Args:
        token (str): JWT access token to revoke

    Returns:
        dict: Revocation response with timestamp

    Raises:
        InvalidTokenException: If the token lacks a JTI or expiry claim
    """
    payload = decode_jwt_token(token)

    jti = payload.get("jti")
    exp = payload.get("exp")

    if not jti or not exp:
        raise InvalidTokenException("Token does not contain JTI or expiration time")

    now = datetime.now(timezone.utc)
    ttl = int(exp - now.timestamp())

    if ttl <= 0:
        logger.info(f"Token already expired, skipping revocation: {jti}")
        return {
            "message": "Token already expired",
            "revoked_at": now.isoformat()
        }

    await redis_client.revoke_token(jti, ttl)

    logger.info(f"Token revoked successfully: {jti}")

    return {
        "message": "Successfully revoked token",
        "revoked_at": now.isoformat()
    }
