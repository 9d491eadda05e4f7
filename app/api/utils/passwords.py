"""
Password hashing helpers.

Hashes are produced with passlib; ``pbkdf2_sha256`` is the default scheme and
bcrypt hashes are still accepted for verification.
"""

from passlib.context import CryptContext

PASSWORD_CONTEXT = CryptContext(
    schemes=["pbkdf2_sha256", "bcrypt"],
    default="pbkdf2_sha256",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """
    Hash a plain-text password.

    Args:
        password (str): Plain-text password

    Returns:
        str: Encoded password hash
    """
    return PASSWORD_CONTEXT.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plain-text password against a stored hash.

    Args:
        password (str): Plain-text password
        password_hash (str): Stored hash

    Returns:
        bool: True if the password matches
    """
    if not password_hash:
        return False
    try:
        return PASSWORD_CONTEXT.verify(password, password_hash)
    except ValueError:
        return False
