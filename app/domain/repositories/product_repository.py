"""
Catalog Repository Interfaces.
Defines specific data access operations for Products and Categories.
"""

from typing import Any, Dict

from app.domain.models.product import Category, Product
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.product import ProductFilter


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def get_with_filters(self, filters: ProductFilter) -> Dict[str, Any]:
        """Get products with filtering and pagination."""
        ...


class CategoryRepository(BaseRepository[Category]):
    """Interface for Category-specific operations."""

    def has_products(self, category_id: int) -> bool:
        """Whether any product still belongs to the category."""
        ...
