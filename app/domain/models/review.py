"""Review model — maps to the 'reviews' table."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.domain.enums import ReviewStatus
from app.infrastructure.database import Base


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("score BETWEEN 1 AND 5", name="ck_reviews_score"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    score = Column(Integer, nullable=False)
    comment = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    is_reported = Column(Boolean, default=False, nullable=False)
    status = Column(String(50), default=ReviewStatus.PENDENTE.value, nullable=False)
    version_id = Column(Integer, nullable=False)

    product = relationship("Product", lazy="joined")

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        return f"<Review {self.id} - product {self.product_id} - {self.score}>"
