"""Order models — maps to the 'orders', 'order_items' and 'payments' tables.

Child rows are removed explicitly by the order repository; relationships
never cascade deletes on their own (passive_deletes="all").
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.domain.enums import OrderStatus, PaymentStatus
from app.infrastructure.database import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    status = Column(String(50), nullable=False, default=OrderStatus.PENDENTE.value)
    total = Column(Numeric(10, 2), nullable=False)
    delivery_type = Column(String(50), nullable=False)  # Retirada, Entrega
    delivery_address = Column(String(500), nullable=True)
    notes = Column(String(1000), nullable=True)
    coupon_id = Column(Integer, ForeignKey("coupons.id"), nullable=True, index=True)
    version_id = Column(Integer, nullable=False)

    customer = relationship("Customer", lazy="select")
    coupon = relationship("Coupon", lazy="joined")
    items = relationship("OrderItem", back_populates="order", lazy="selectin", passive_deletes="all")
    payment = relationship("Payment", back_populates="order", uselist=False, lazy="selectin", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        return f"<Order {self.id} - {self.status}>"


class OrderItem(Base):
    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id"), primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)
    quantity = Column(Integer, nullable=False, default=1)
    # Price captured when the order was placed; never follows the product.
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product", lazy="joined")

    @property
    def subtotal(self):
        return self.unit_price * self.quantity

    def __repr__(self):
        return f"<OrderItem {self.order_id}/{self.product_id} x{self.quantity}>"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), unique=True, nullable=False)
    method = Column(String(50), nullable=False)  # Cartão de Crédito, Pix, Dinheiro...
    amount = Column(Numeric(10, 2), nullable=False)
    paid_at = Column(DateTime, default=utcnow, nullable=False)
    status = Column(String(50), nullable=False, default=PaymentStatus.PENDENTE.value)
    external_transaction_id = Column(String(100), nullable=True)
    version_id = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="payment")

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        return f"<Payment {self.id} - order {self.order_id} - {self.status}>"
