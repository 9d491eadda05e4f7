from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from app.api.v1.models.user import UserRole


class LoginRequest(BaseModel):
    """Email and password login request."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Account password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "admin@example.com",
                "password": "Password123",
            }
        }


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiry in seconds")
    user_id: str = Field(..., description="User UUID")
    email: str = Field(..., description="User email")
    role: UserRole = Field(..., description="User role")

    class Config:
        json_schema_extra = {
            "example": {
                "access_token": "eyJhbGc...",
                "token_type": "Bearer",
                "expires_in": 172800,
                "user_id": "550e8400-e29b-41d4-a716-446655440000",
                "email": "admin@example.com",
                "role": "admin",
            }
        }


class CurrentUserResponse(BaseModel):
    """Profile of the authenticated user."""

    id: UUID
    email: str
    role: UserRole
    first_name: str = ""
    last_name: str = ""
    activated: bool = False

    class Config:
        from_attributes = True


class LogoutResponse(BaseModel):
    """Logout response schema."""

    message: str = Field(..., description="Logout status message")
    revoked_at: str = Field(..., description="ISO timestamp of revocation")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Successfully revoked token",
                "revoked_at": "2025-12-11T10:30:00Z",
            }
        }
