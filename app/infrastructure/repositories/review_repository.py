"""
SQLAlchemy Implementation of the Review Repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.domain.models.review import Review
from app.domain.repositories.review_repository import ReviewRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyReviewRepository(SQLAlchemyRepository[Review], ReviewRepository):
    """Review repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Review)

    def list_filtered(self, product_id: Optional[int] = None) -> List[Review]:
        query = self.db.query(Review)
        if product_id is not None:
            query = query.filter(Review.product_id == product_id)
        return query.order_by(Review.created_at.desc(), Review.id.desc()).all()

    def list_reported(self) -> List[Review]:
        return (
            self.db.query(Review)
            .filter(Review.is_reported.is_(True))
            .order_by(Review.created_at.asc())
            .all()
        )

    def list_by_customer(self, customer_id: str) -> List[Review]:
        return self.db.query(Review).filter(Review.customer_id == customer_id).all()

    def delete_for_product(self, product_id: int) -> int:
        reviews = self.db.query(Review).filter(Review.product_id == product_id).all()
        for review in reviews:
            self.db.delete(review)
        self.flush()
        return len(reviews)
