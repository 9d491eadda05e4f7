"""
Redis utilities for session token revocation.

Logout (API and CMS) stores the JWT ID of a revoked token under a key that
expires together with the token; JWT verification checks for that key.
"""

import logging
from typing import Optional
import redis.asyncio as redis
from config import settings

logger = logging.getLogger(__name__)

REVOKED_TOKEN_PREFIX = "storefront:revoked_token:"

_redis_instance: Optional[redis.Redis] = None


def _revoked_key(jti: str) -> str:
    return f"{REVOKED_TOKEN_PREFIX}{jti}"


async def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client instance.

    Returns:
        redis.Redis: Redis client instance
    """
    global _redis_instance

    if _redis_instance is None:
        try:
            _redis_instance = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
            )
            await _redis_instance.ping()
            logger.info("Redis client connected successfully")
        except Exception as e:
            _redis_instance = None
            logger.error(f"Failed to connect to Redis: {str(e)}", exc_info=True)
            raise

    return _redis_instance


async def close_redis_client():
    """Close the Redis connection if one was opened."""
    global _redis_instance

    if _redis_instance:
        await _redis_instance.aclose()
        _redis_instance = None
        logger.info("Redis client closed")


async def revoke_token(jti: str, ttl: int):
    """
    Mark a JWT as revoked until it would have expired anyway.

    Args:
        jti (str): JWT ID (jti claim from token)
        ttl (int): Time to live in seconds (remaining token lifetime)

    Example:
        >>> await revoke_token("unique-jti-123", 172800)
    """
    try:
        client = await get_redis_client()
        await client.setex(_revoked_key(jti), ttl, "revoked")
        logger.info(f"Token revoked: {jti} (TTL: {ttl}s)")
    except Exception as e:
        logger.error(f"Failed to revoke token: {str(e)}", exc_info=True)
        raise


async def is_token_revoked(jti: str) -> bool:
    """
    Check if a token is revoked.

    An unreachable Redis is logged and treated as "not revoked".

    Args:
        jti (str): JWT ID to check

    Returns:
        bool: True if token is revoked, False otherwise
    """
    try:
        client = await get_redis_client()
        result = await client.exists(_revoked_key(jti))
        return bool(result)
    except Exception as e:
        logger.error(f"Failed to check token revocation: {str(e)}", exc_info=True)
        return False
