# backend/schemas/category.py
from pydantic import BaseModel, Field
from typing import Optional

from schemas.base import ORMBase


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None


# Schema for partial category updates
class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None


class CategoryOut(ORMBase):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
