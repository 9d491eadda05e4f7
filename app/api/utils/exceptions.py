"""
Custom exception classes for the Storefront CMS API.

This module defines all custom exceptions used throughout the application
for consistent error handling and logging.
"""

from typing import Any, Optional
from fastapi import status


class StorefrontException(Exception):
    """
    Base exception class for all Storefront CMS exceptions.

    Attributes:
        message (str): Error message
        status_code (int): HTTP status code
        error_code (str): Application-specific error code
        details (dict): Additional error details
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize StorefrontException.

        Args:
            message (str): Error message
            status_code (int): HTTP status code (default: 500)
            error_code (str): Application-specific error code (default: INTERNAL_ERROR)
            details (dict, optional): Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidCredentialsException(StorefrontException):
    """
    Raised when a login attempt uses an unknown email or a wrong password.

    Examples:
        >>> raise InvalidCredentialsException("Wrong password provided")
    """

    def __init__(self, message: str = "Invalid email or password", details: Optional[dict] = None):
        """Initialize InvalidCredentialsException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="INVALID_CREDENTIALS",
            details=details,
        )


class UserNotFoundException(StorefrontException):
    """
    Raised when a user account is not found.

    Examples:
        >>> raise UserNotFoundException("User with email not found")
    """

    def __init__(self, message: str = "User not found", details: Optional[dict] = None):
        """Initialize UserNotFoundException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="USER_NOT_FOUND",
            details=details,
        )


class EmailAlreadyInUseException(StorefrontException):
    """
    Raised when attempting to register with an email already in use.

    Examples:
        >>> raise EmailAlreadyInUseException("Email already registered")
    """

    def __init__(self, message: str = "Email is already in use", details: Optional[dict] = None):
        """Initialize EmailAlreadyInUseException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="EMAIL_IN_USE",
            details=details,
        )


class TokenExpiredException(StorefrontException):
    """
    Raised when an authentication token has expired.

    Examples:
        >>> raise TokenExpiredException("JWT token has expired")
    """

    def __init__(self, message: str = "Token has expired", details: Optional[dict] = None):
        """Initialize TokenExpiredException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="TOKEN_EXPIRED",
            details=details,
        )


class InvalidTokenException(StorefrontException):
    """
    Raised when a token is invalid or malformed.

    Examples:
        >>> raise InvalidTokenException("Invalid token signature")
    """

    def __init__(self, message: str = "Invalid token", details: Optional[dict] = None):
        """Initialize InvalidTokenException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="INVALID_TOKEN",
            details=details,
        )


class TokenRevokedException(StorefrontException):
    """
    Raised when a token has been revoked.

    Examples:
        >>> raise TokenRevokedException("Token has been revoked")
    """

    def __init__(self, message: str = "Token has been revoked", details: Optional[dict] = None):
        """Initialize TokenRevokedException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="TOKEN_REVOKED",
            details=details,
        )


class MissingAuthorizationException(StorefrontException):
    """
    Raised when authorization header is missing.

    Examples:
        >>> raise MissingAuthorizationException("Missing authorization header")
    """

    def __init__(self, message: str = "Missing or invalid authorization header", details: Optional[dict] = None):
        """Initialize MissingAuthorizationException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="MISSING_AUTHORIZATION",
            details=details,
        )


class InsufficientPermissionsException(StorefrontException):
    """
    Raised when an authenticated user lacks the role required for an action.

    Examples:
        >>> raise InsufficientPermissionsException("Admin role required")
    """

    def __init__(self, message: str = "Insufficient permissions", details: Optional[dict] = None):
        """Initialize InsufficientPermissionsException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="INSUFFICIENT_PERMISSIONS",
            details=details,
        )


class RequestValidationFailedException(StorefrontException):
    """
    Raised when a request body fails schema validation.

    Examples:
        >>> raise RequestValidationFailedException(details={"errors": ["email: invalid"]})
    """

    def __init__(self, message: str = "Validation failed", details: Optional[dict] = None):
        """Initialize RequestValidationFailedException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class InvalidPaginationException(StorefrontException):
    """
    Raised when page or page size fall outside the accepted bounds.

    Examples:
        >>> raise InvalidPaginationException(details={"page": 0})
    """

    def __init__(self, message: str = "Invalid pagination parameters", details: Optional[dict] = None):
        """Initialize InvalidPaginationException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_PAGINATION",
            details=details,
        )


class ProductNotFoundException(StorefrontException):
    """
    Raised when a product is not found in the database.

    Examples:
        >>> raise ProductNotFoundException("Product not found")
    """

    def __init__(self, message: str = "Product not found", details: Optional[dict] = None):
        """Initialize ProductNotFoundException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="PRODUCT_NOT_FOUND",
            details=details,
        )


class ProductAlreadyExistsException(StorefrontException):
    """
    Raised when a product with the same SKU already exists.

    Examples:
        >>> raise ProductAlreadyExistsException("SKU TEST-001 already exists")
    """

    def __init__(self, message: str = "Product with this SKU already exists", details: Optional[dict] = None):
        """Initialize ProductAlreadyExistsException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="DUPLICATE_SKU",
            details=details,
        )


class ChatServiceUnavailableException(StorefrontException):
    """
    Raised when a chat message cannot be answered by the assistant backend.

    Examples:
        >>> raise ChatServiceUnavailableException()
    """

    def __init__(self, message: str = "Chat service not yet implemented", details: Optional[dict] = None):
        """Initialize ChatServiceUnavailableException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            error_code="CHAT_NOT_IMPLEMENTED",
            details=details,
        )
