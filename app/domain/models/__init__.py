"""Import every model so SQLAlchemy can resolve relationships by name."""

from app.domain.models.user import Role, User, user_roles
from app.domain.models.customer import Administrator, Customer
from app.domain.models.product import Category, Product
from app.domain.models.coupon import Coupon
from app.domain.models.order import Order, OrderItem, Payment
from app.domain.models.review import Review

__all__ = [
    "Administrator",
    "Category",
    "Coupon",
    "Customer",
    "Order",
    "OrderItem",
    "Payment",
    "Product",
    "Review",
    "Role",
    "User",
    "user_roles",
]
