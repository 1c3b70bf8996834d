"""Pydantic schemas for coupons."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.enums import DiscountType


class CouponBase(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    discount_type: DiscountType
    discount_value: Decimal = Field(gt=0, max_digits=5, decimal_places=2)
    starts_at: datetime
    ends_at: datetime
    is_active: bool = True
    max_uses: Optional[int] = Field(default=None, ge=1)


class CouponCreate(CouponBase):
    pass


class CouponUpdate(BaseModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Decimal] = Field(default=None, gt=0, max_digits=5, decimal_places=2)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    is_active: Optional[bool] = None
    max_uses: Optional[int] = Field(default=None, ge=1)
    version_id: Optional[int] = None


class CouponRead(CouponBase):
    id: int
    version_id: int

    model_config = {"from_attributes": True}
