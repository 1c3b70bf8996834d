"""
SQLAlchemy Implementation of the Order and Payment Repositories.
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.enums import OrderStatus
from app.domain.models.order import Order, OrderItem, Payment
from app.domain.repositories.order_repository import OrderRepository, PaymentRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyOrderRepository(SQLAlchemyRepository[Order], OrderRepository):
    """Order repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def list_by_customer(self, customer_id: str) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def list_all(self, status: Optional[str] = None) -> List[Order]:
        query = self.db.query(Order)
        if status:
            query = query.filter(Order.status == status)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def add_with_items(self, order: Order, items: List[OrderItem], payment: Optional[Payment] = None) -> Order:
        self.db.add(order)
        # The order id is needed by the children
        self.flush(order)

        for item in items:
            item.order_id = order.id
            self.db.add(item)

        if payment is not None:
            payment.order_id = order.id
            self.db.add(payment)

        self.flush(order)
        self.db.refresh(order)
        return order

    def delete_cascade(self, order: Order) -> None:
        for item in list(order.items):
            self.db.delete(item)
        if order.payment is not None:
            self.db.delete(order.payment)
        self.flush(order)

        self.db.delete(order)
        self.flush(order)

    def count_coupon_uses(self, coupon_id: int) -> int:
        return (
            self.db.query(func.count(Order.id))
            .filter(Order.coupon_id == coupon_id)
            .filter(Order.status != OrderStatus.CANCELADO.value)
            .scalar()
            or 0
        )

    def product_is_referenced(self, product_id: int) -> bool:
        return (
            self.db.query(OrderItem.order_id)
            .filter(OrderItem.product_id == product_id)
            .first()
            is not None
        )


class SQLAlchemyPaymentRepository(SQLAlchemyRepository[Payment], PaymentRepository):
    """Payment repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Payment)

    def get_by_order_id(self, order_id: int) -> Optional[Payment]:
        return self.db.query(Payment).filter(Payment.order_id == order_id).first()

    def list_by_customer(self, customer_id: str) -> List[Payment]:
        return (
            self.db.query(Payment)
            .join(Order, Payment.order_id == Order.id)
            .filter(Order.customer_id == customer_id)
            .order_by(Payment.paid_at.desc())
            .all()
        )

    def list_all(self) -> List[Payment]:
        return self.db.query(Payment).order_by(Payment.paid_at.desc()).all()
