import enum
import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel


class UserRole(str, enum.Enum):
    """Roles recognised by the CMS and API guards."""

    ADMIN = "admin"
    CUSTOMER = "customer"


class User(SQLModel, table=True):
    """Registered shop account; admins additionally have CMS access."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    hash: str = Field(max_length=255)

    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    phone: str = Field(default="", max_length=50)
    address: str = Field(default="", max_length=255)
    city: str = Field(default="", max_length=100)
    postal: str = Field(default="", max_length=20)
    country: str = Field(default="", max_length=100)

    role: UserRole = Field(default=UserRole.CUSTOMER, index=True)
    activated: bool = Field(default=False)
    banned: bool = Field(default=False)
    deleted: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "role": "customer",
                "activated": False,
            }
        }
