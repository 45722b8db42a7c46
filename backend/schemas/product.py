# backend/schemas/product.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

from schemas.base import ORMBase


# Shared base attributes for product entities
class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    stock: int = 0
    is_featured: bool = False
    is_active: bool = True


# Schema for creating a new product
class ProductCreate(ProductBase):
    rating: Decimal = Field(default=Decimal("0"), ge=0, le=5)
    review_count: int = Field(default=0, ge=0)


# Schema for partial product updates
class ProductUpdate(BaseModel):
    """Schema for PUT/PATCH requests - all fields optional, only sent ones are written."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    stock: Optional[int] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    rating: Optional[Decimal] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)


# Full product representation including ID
class ProductOut(ORMBase):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = None
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    stock: int
    is_featured: bool
    is_active: bool
    rating: Decimal
    review_count: int
    created_at: datetime
