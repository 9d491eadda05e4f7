"""
Registration request and response schemas.
"""

from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.api.v1.models.user import UserRole

PASSWORD_MIN_LENGTH = 8


def check_password_rules(password: str) -> dict[str, bool]:
    """
    Evaluate each password rule separately.

    Args:
        password (str): Candidate password

    Returns:
        dict: ``min_length``, ``has_uppercase`` and ``has_number`` flags
    """
    return {
        "min_length": len(password) >= PASSWORD_MIN_LENGTH,
        "has_uppercase": any(char.isupper() for char in password),
        "has_number": any(char.isdigit() for char in password),
    }


class RegistrationRequest(BaseModel):
    """Customer account registration request."""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="At least 8 characters, one uppercase letter and one digit")
    terms_accepted: bool = Field(..., description="Terms of service must be accepted")

    @field_validator("password")
    @classmethod
    def password_meets_rules(cls, value: str) -> str:
        failed = [rule for rule, ok in check_password_rules(value).items() if not ok]
        if failed:
            raise ValueError(f"Password does not meet requirements: {', '.join(failed)}")
        return value

    @field_validator("terms_accepted")
    @classmethod
    def terms_must_be_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("Terms must be accepted")
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "email": "customer@example.com",
                "password": "Password123",
                "terms_accepted": True,
            }
        }


class RegistrationResponse(BaseModel):
    """Public view of a newly registered account."""

    id: UUID = Field(..., description="User UUID")
    email: str = Field(..., description="User email")
    role: UserRole = Field(..., description="Assigned role")
