"""
Exception handlers for the Storefront CMS API.

This module provides global exception handlers for FastAPI application.
"""

import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError

from app.api.utils.exceptions import StorefrontException
from app.api.utils.response import error_response

logger = logging.getLogger(__name__)


async def storefront_exception_handler(request: Request, exc: StorefrontException):
    """
    Global exception handler for all StorefrontException and subclasses.

    Args:
        request (Request): The request that caused the exception
        exc (StorefrontException): The exception instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.warning(f"{exc.error_code}: {exc.message}")

    return error_response(
        status_code=exc.status_code,
        message=exc.message,
        detail=exc.error_code,
        errors=exc.details.get("errors"),
    )


def format_validation_errors(errors: list[dict]) -> list[str]:
    """
    Flatten pydantic error dicts into ``"field -> sub: message"`` strings.

    Args:
        errors (list[dict]): Errors as returned by ``ValidationError.errors()``

    Returns:
        list[str]: One readable line per error
    """
    messages = []
    for error in errors:
        location = [str(loc) for loc in error.get("loc", ()) if loc != "body"]
        field = " -> ".join(location) or "body"
        messages.append(f"{field}: {error['msg']}")
    return messages


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global exception handler for request validation errors.

    Body and query validation failures are reported as 400 responses.

    Args:
        request (Request): The request that caused the exception
        exc (RequestValidationError): The validation exception

    Returns:
        JSONResponse: Formatted error response
    """
    error_messages = format_validation_errors(exc.errors())

    logger.warning(f"Validation error: {error_messages}")

    return error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        detail="VALIDATION_ERROR",
        errors=error_messages,
    )
