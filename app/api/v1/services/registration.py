"""
Customer registration service.
"""

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.core.i18n import translate
from app.api.utils.exceptions import EmailAlreadyInUseException, UserNotFoundException
from app.api.utils.passwords import hash_password
from app.api.v1.models.user import User, UserRole
from app.api.v1.schemas.registration import RegistrationRequest, check_password_rules
from app.api.v1.services.auth import AuthService

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: str) -> bool:
    """Quick shape check used by forms before the full schema runs."""
    return bool(EMAIL_PATTERN.match(email))


def validate_password(password: str) -> dict[str, bool]:
    """Per-rule password check: ``min_length``, ``has_uppercase``, ``has_number``."""
    return check_password_rules(password)


class RegistrationService:
    """Creates customer accounts."""

    @staticmethod
    async def create_user_account(
        data: RegistrationRequest,
        session: AsyncSession,
        locale: str = "en",
    ) -> User:
        """
        Create an inactive customer account.

        Args:
            data (RegistrationRequest): Validated registration payload
            session (AsyncSession): Database session
            locale (str): Locale for the duplicate-email message

        Returns:
            User: The new user

        Raises:
            EmailAlreadyInUseException: If a non-deleted user already has the email
        """
        try:
            await AuthService.get_user_by_email(data.email, session)
        except UserNotFoundException:
            pass
        else:
            logger.warning(f"Registration rejected, email in use: {data.email}")
            raise EmailAlreadyInUseException(translate("registration.errors.userExists", locale))

        user = User(
            email=data.email,
            hash=hash_password(data.password),
            role=UserRole.CUSTOMER,
            activated=False,
            banned=False,
            deleted=False,
        )

        try:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        except IntegrityError:
            # A soft-deleted account still holds the unique email
            await session.rollback()
            logger.warning(f"Registration rejected, email reserved: {data.email}")
            raise EmailAlreadyInUseException(translate("registration.errors.userExists", locale))
        except Exception as e:
            await session.rollback()
            logger.error(f"Failed to create user account: {str(e)}", exc_info=True)
            raise

        logger.info(f"User account created: {user.email}")
        return user

    @staticmethod
    async def create_admin_account(
        email: str,
        password: str,
        session: AsyncSession,
        first_name: str = "",
        last_name: str = "",
    ) -> tuple[User, bool]:
        """
        Create an activated admin, or promote an existing user to admin.

        Args:
            email (str): Admin email
            password (str): Plain-text password; only used for new accounts
            session (AsyncSession): Database session
            first_name (str): First name for new accounts
            last_name (str): Last name for new accounts

        Returns:
            tuple[User, bool]: The admin and whether the account was newly created
        """
        try:
            user = await AuthService.get_user_by_email(email, session)
        except UserNotFoundException:
            user = None

        created = user is None
        if created:
            user = User(
                email=email,
                hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=UserRole.ADMIN,
                activated=True,
                banned=False,
                deleted=False,
            )
        else:
            user.role = UserRole.ADMIN
            user.activated = True

        try:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        except Exception as e:
            await session.rollback()
            logger.error(f"Failed to seed admin account: {str(e)}", exc_info=True)
            raise

        logger.info(f"Admin account {'created' if created else 'promoted'}: {user.email}")
        return user, created
