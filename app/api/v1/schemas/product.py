"""
Product request and response schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, HttpUrl


class ProductCreateRequest(BaseModel):
    """Product creation request model."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str = Field(..., min_length=1, max_length=2000, description="Product description")
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Unit price")
    sku: str = Field(..., min_length=1, max_length=50, description="Stock keeping unit")
    stock: int = Field(..., ge=0, description="Units in stock")
    image_url: Optional[HttpUrl] = Field(default=None, description="Product image URL")
    category: Optional[str] = Field(default=None, min_length=1, max_length=100, description="Category name")
    is_active: bool = Field(..., description="Whether the product is visible in the shop")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Linen shirt",
                "description": "Relaxed fit linen shirt",
                "price": "129.99",
                "sku": "SHIRT-LIN-001",
                "stock": 12,
                "image_url": "https://cdn.example.com/shirt.jpg",
                "category": "Clothing",
                "is_active": True,
            }
        }


class ProductResponse(BaseModel):
    """Product response model."""

    id: UUID = Field(..., description="Product UUID")
    name: str
    description: str
    price: Decimal
    sku: str
    stock: int
    image_url: Optional[str] = None
    category: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted: bool = False

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Linen shirt",
                "description": "Relaxed fit linen shirt",
                "price": "129.99",
                "sku": "SHIRT-LIN-001",
                "stock": 12,
                "image_url": None,
                "category": "Clothing",
                "is_active": True,
                "created_at": "2025-12-10T14:30:00Z",
                "updated_at": "2025-12-10T14:30:00Z",
                "deleted": False,
            }
        }


class ProductCreatedResponse(BaseModel):
    """Response model for a newly created product."""

    id: UUID = Field(..., description="Product UUID")
    sku: str = Field(..., description="Product SKU")
