"""
Order Repository Interfaces.
Orders, their items and their payment.
"""

from typing import List, Optional

from app.domain.models.order import Order, OrderItem, Payment
from app.domain.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    """Interface for Order-specific operations."""

    def list_by_customer(self, customer_id: str) -> List[Order]:
        """Orders owned by one customer, newest first."""
        ...

    def list_all(self, status: Optional[str] = None) -> List[Order]:
        """Every order, optionally filtered by status."""
        ...

    def add_with_items(self, order: Order, items: List[OrderItem], payment: Optional[Payment] = None) -> Order:
        """Insert an order with its items (and optional payment) in the caller's transaction."""
        ...

    def delete_cascade(self, order: Order) -> None:
        """Delete the order's items, its payment and the order itself."""
        ...

    def count_coupon_uses(self, coupon_id: int) -> int:
        """Number of non-cancelled orders that used a coupon."""
        ...

    def product_is_referenced(self, product_id: int) -> bool:
        """Whether any order item points at the product."""
        ...


class PaymentRepository(BaseRepository[Payment]):
    """Interface for Payment-specific operations."""

    def get_by_order_id(self, order_id: int) -> Optional[Payment]:
        ...

    def list_by_customer(self, customer_id: str) -> List[Payment]:
        ...

    def list_all(self) -> List[Payment]:
        ...
