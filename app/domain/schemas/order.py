"""Pydantic schemas for orders, order items and payments."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.enums import DeliveryType, OrderStatus, PaymentStatus
from app.domain.schemas.coupon import CouponRead


class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class OrderCreate(BaseModel):
    delivery_type: DeliveryType
    delivery_address: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)
    coupon_id: Optional[int] = None
    items: list[OrderItemCreate] = []
    payment_method: Optional[str] = Field(default=None, max_length=50)
    # Only honoured for administrators placing an order on a customer's behalf
    customer_id: Optional[str] = None


class OrderUpdate(BaseModel):
    delivery_type: Optional[DeliveryType] = None
    delivery_address: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)
    customer_id: Optional[str] = None
    version_id: Optional[int] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    version_id: Optional[int] = None


class OrderItemRead(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    model_config = {"from_attributes": True}


class PaymentBase(BaseModel):
    method: str = Field(min_length=1, max_length=50)
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    status: PaymentStatus = PaymentStatus.PENDENTE
    paid_at: Optional[datetime] = None
    external_transaction_id: Optional[str] = Field(default=None, max_length=100)


class PaymentCreate(PaymentBase):
    order_id: int


class PaymentUpdate(BaseModel):
    method: Optional[str] = Field(default=None, min_length=1, max_length=50)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    status: Optional[PaymentStatus] = None
    paid_at: Optional[datetime] = None
    external_transaction_id: Optional[str] = Field(default=None, max_length=100)
    version_id: Optional[int] = None


class PaymentRead(PaymentBase):
    id: int
    order_id: int
    paid_at: datetime
    version_id: int

    model_config = {"from_attributes": True}


class OrderRead(BaseModel):
    id: int
    customer_id: str
    created_at: datetime
    status: OrderStatus
    total: Decimal
    delivery_type: DeliveryType
    delivery_address: Optional[str] = None
    notes: Optional[str] = None
    coupon_id: Optional[int] = None
    coupon: Optional[CouponRead] = None
    items: list[OrderItemRead] = []
    payment: Optional[PaymentRead] = None
    version_id: int

    model_config = {"from_attributes": True}
