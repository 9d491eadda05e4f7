import logging
import uuid
from typing import Union

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api.v1.models.user import User
from app.api.utils.exceptions import InvalidCredentialsException, UserNotFoundException
from app.api.utils.passwords import verify_password

logger = logging.getLogger(__name__)


def _as_uuid(value: Union[str, uuid.UUID]) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise UserNotFoundException(f"User {value} not found")


class AuthService:
    """Service for authentication and user lookup."""

    @staticmethod
    async def authenticate(email: str, password: str, session: AsyncSession) -> User:
        """
        Check an email/password pair.

        Deleted and banned accounts cannot log in; the caller is not told
        which check failed.

        Args:
            email (str): Account email
            password (str): Plain-text password
            session (AsyncSession): Database session

        Returns:
            User: The authenticated user

        Raises:
            InvalidCredentialsException: If the credentials are not accepted
        """
        try:
            user = await AuthService.get_user_by_email(email, session)
        except UserNotFoundException:
            logger.warning(f"Login attempt for unknown email: {email}")
            raise InvalidCredentialsException()

        if user.banned:
            logger.warning(f"Login attempt for banned user: {email}")
            raise InvalidCredentialsException()

        if not verify_password(password, user.hash):
            logger.warning(f"Wrong password for user: {email}")
            raise InvalidCredentialsException()

        logger.info(f"User authenticated: {email}")
        return user

    @staticmethod
    async def get_user_by_email(email: str, session: AsyncSession) -> User:
        """
        Get a non-deleted user by email.

        Args:
            email (str): User email
            session (AsyncSession): Database session

        Returns:
            User: User object

        Raises:
            UserNotFoundException: If user not found
        """
        try:
            statement = select(User).where(User.email == email, User.deleted == False)  # noqa: E712
            result = await session.execute(statement)
            user = result.scalar_one_or_none()

            if not user:
                raise UserNotFoundException(f"User {email} not found")

            return user
        except UserNotFoundException:
            raise
        except Exception as e:
            logger.error(f"Failed to get user by email: {str(e)}", exc_info=True)
            raise

    @staticmethod
    async def get_user_by_id(user_id: Union[str, uuid.UUID], session: AsyncSession) -> User:
        """
        Get a non-deleted user by ID.

        Args:
            user_id (str | UUID): User UUID
            session (AsyncSession): Database session

        Returns:
            User: User object

        Raises:
            UserNotFoundException: If user not found or the ID is malformed
        """
        try:
            user = await session.get(User, _as_uuid(user_id))

            if not user or user.deleted:
                raise UserNotFoundException(f"User {user_id} not found")

            return user
        except UserNotFoundException:
            raise
        except Exception as e:
            logger.error(f"Failed to get user by ID: {str(e)}", exc_info=True)
            raise
