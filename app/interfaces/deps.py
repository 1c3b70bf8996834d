"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.review_repository import ReviewRepository
from app.infrastructure.database import get_db
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.review_repository import SQLAlchemyReviewRepository


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db)


def get_review_repository(db: Session = Depends(get_db)) -> ReviewRepository:
    """Get review repository instance."""
    return SQLAlchemyReviewRepository(db)
