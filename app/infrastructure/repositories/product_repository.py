"""
SQLAlchemy Implementation of the Catalog Repositories.
"""

from typing import Any, Dict

from sqlalchemy.orm import Session

from app.domain.models.product import Category, Product
from app.domain.repositories.product_repository import CategoryRepository, ProductRepository
from app.domain.schemas.product import ProductFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def get_with_filters(self, filters: ProductFilter) -> Dict[str, Any]:
        """Get products with filtering and pagination."""
        query = self.db.query(Product)

        if filters.category_id:
            query = query.filter(Product.category_id == filters.category_id)
        if filters.only_available:
            query = query.filter(Product.is_available.is_(True))
        if filters.search:
            query = query.filter(Product.name.ilike(f"%{filters.search}%"))

        total = query.count()
        offset = (filters.page - 1) * filters.page_size
        products = (
            query.order_by(Product.name.asc())
            .offset(offset)
            .limit(filters.page_size)
            .all()
        )

        return {
            "items": products,
            "total": total,
            "page": filters.page,
            "page_size": filters.page_size,
            "total_pages": (total + filters.page_size - 1) // filters.page_size,
        }


class SQLAlchemyCategoryRepository(SQLAlchemyRepository[Category], CategoryRepository):
    """Category repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Category)

    def list(self, skip: int = 0, limit: int = 100):
        return self.db.query(Category).order_by(Category.name).offset(skip).limit(limit).all()

    def has_products(self, category_id: int) -> bool:
        return (
            self.db.query(Product.id).filter(Product.category_id == category_id).first()
            is not None
        )
