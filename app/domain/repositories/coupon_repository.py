"""
Coupon Repository Interface.
"""

from typing import Optional

from app.domain.models.coupon import Coupon
from app.domain.repositories.base import BaseRepository


class CouponRepository(BaseRepository[Coupon]):
    """Interface for Coupon-specific operations."""

    def get_by_code(self, code: str) -> Optional[Coupon]:
        ...
