"""
SQLAlchemy Implementation of the Coupon Repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.domain.models.coupon import Coupon
from app.domain.repositories.coupon_repository import CouponRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyCouponRepository(SQLAlchemyRepository[Coupon], CouponRepository):
    """Coupon repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Coupon)

    def get_by_code(self, code: str) -> Optional[Coupon]:
        return self.db.query(Coupon).filter(Coupon.code == code).first()
