"""Pydantic schemas for the catalog (products and categories)."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CategoryBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    version_id: Optional[int] = None


class CategoryRead(CategoryBase):
    id: int
    version_id: int

    model_config = {"from_attributes": True}


class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_available: bool = True
    category_id: int


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_available: Optional[bool] = None
    category_id: Optional[int] = None
    version_id: Optional[int] = None


class ProductRead(ProductBase):
    id: int
    version_id: int
    category: Optional[CategoryRead] = None

    model_config = {"from_attributes": True}


class ProductFilter(BaseModel):
    category_id: Optional[int] = None
    only_available: bool = False
    search: Optional[str] = None
    page: int = 1
    page_size: int = 50
