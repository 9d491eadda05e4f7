import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel


class Product(SQLModel, table=True):
    """Catalog product. Deletion is soft: rows keep ``deleted=True``."""

    __tablename__ = "products"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=200)
    description: str = Field(max_length=2000)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    sku: str = Field(unique=True, index=True, max_length=50)
    stock: int = Field(default=0)
    image_url: Optional[str] = Field(default=None, max_length=2048)
    category: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    deleted: bool = Field(default=False, index=True)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Linen shirt",
                "description": "Relaxed fit linen shirt",
                "price": "129.99",
                "sku": "SHIRT-LIN-001",
                "stock": 12,
                "category": "Clothing",
                "is_active": True,
            }
        }
