"""Order service: placing, reading, editing, moving and removing orders.

Rules enforced here:
- a customer only ever sees or touches their own orders; administrators see all;
- item prices are snapshotted from the catalog when the order is placed;
- the total is computed from the items and the coupon, never taken from input;
- status moves Pendente -> EmPreparação -> Entregue, or to Cancelado from any
  non-terminal state.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from app.application.services.authorization import (
    Actor,
    require_admin,
    require_authenticated_role,
    require_owner_or_admin_hidden,
)
from app.application.services.coupon_service import compute_discount, ensure_usable
from app.core.clock import utcnow
from app.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    InvalidStatusTransitionException,
)
from app.domain.enums import DeliveryType, OrderStatus, PaymentStatus
from app.domain.models.order import Order, OrderItem, Payment
from app.domain.schemas.order import OrderCreate, OrderUpdate
from app.infrastructure.database import transaction
from app.infrastructure.repositories.coupon_repository import SQLAlchemyCouponRepository
from app.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyCustomerRepository

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")
ORDER_NOT_FOUND = "Pedido não encontrado"

ALLOWED_TRANSITIONS = {
    OrderStatus.PENDENTE: {OrderStatus.EM_PREPARACAO, OrderStatus.CANCELADO},
    OrderStatus.EM_PREPARACAO: {OrderStatus.ENTREGUE, OrderStatus.CANCELADO},
    OrderStatus.ENTREGUE: set(),
    OrderStatus.CANCELADO: set(),
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def _validate_delivery(delivery_type: DeliveryType, delivery_address: Optional[str]) -> None:
    if delivery_type == DeliveryType.ENTREGA and not (delivery_address or "").strip():
        raise BusinessRuleViolationException(
            "Endereço de entrega obrigatório",
            {"delivery_address": "Informe o endereço para pedidos com entrega."},
        )


def _load_order(db: Session, order_id: int) -> Order:
    order = SQLAlchemyOrderRepository(db).get_by_id(order_id)
    if order is None:
        raise EntityNotFoundException(ORDER_NOT_FOUND)
    return order


def create_order(db: Session, data: OrderCreate, actor: Actor) -> Order:
    """Place an order for the acting customer (or, for admins, on a customer's behalf)."""
    require_authenticated_role(actor, "create_order")

    customer_id = data.customer_id if actor.is_admin and data.customer_id else actor.id
    if SQLAlchemyCustomerRepository(db).get_by_id(customer_id) is None:
        raise BusinessRuleViolationException(
            "Cliente inexistente", {"customer_id": "O cliente informado não existe."}
        )

    _validate_delivery(data.delivery_type, data.delivery_address)

    if not data.items:
        raise BusinessRuleViolationException("O pedido precisa de ao menos um item", {"items": "Lista vazia."})
    product_ids = [item.product_id for item in data.items]
    if len(set(product_ids)) != len(product_ids):
        raise BusinessRuleViolationException(
            "Produto repetido no pedido", {"items": "Cada produto deve aparecer uma única vez."}
        )

    products = SQLAlchemyProductRepository(db)
    items: List[OrderItem] = []
    subtotal = Decimal("0.00")
    for requested in data.items:
        if requested.quantity < 1:
            raise BusinessRuleViolationException(
                "Quantidade inválida", {"items": f"Quantidade do produto {requested.product_id} deve ser ao menos 1."}
            )
        product = products.get_by_id(requested.product_id)
        if product is None:
            raise EntityNotFoundException(f"Produto {requested.product_id} não encontrado")
        if not product.is_available:
            raise BusinessRuleViolationException(
                "Produto indisponível", {"items": f"O produto {product.name} não está disponível."}
            )
        unit_price = Decimal(product.price)
        items.append(OrderItem(product_id=product.id, quantity=requested.quantity, unit_price=unit_price))
        subtotal += unit_price * requested.quantity

    coupon = None
    discount = Decimal("0.00")
    if data.coupon_id is not None:
        coupon = SQLAlchemyCouponRepository(db).get_by_id(data.coupon_id)
        if coupon is None:
            raise EntityNotFoundException("Cupom não encontrado")
        ensure_usable(db, coupon)
        discount = compute_discount(coupon, subtotal)

    total = max(subtotal - discount, Decimal("0.00")).quantize(CENT, rounding=ROUND_HALF_UP)

    order = Order(
        customer_id=customer_id,
        created_at=utcnow(),
        status=OrderStatus.PENDENTE.value,
        total=total,
        delivery_type=data.delivery_type.value,
        delivery_address=data.delivery_address if data.delivery_type == DeliveryType.ENTREGA else None,
        notes=data.notes,
        coupon_id=coupon.id if coupon else None,
    )
    payment = None
    if data.payment_method and total > 0:
        payment = Payment(
            method=data.payment_method,
            amount=total,
            paid_at=utcnow(),
            status=PaymentStatus.PENDENTE.value,
        )

    with transaction(db):
        order = SQLAlchemyOrderRepository(db).add_with_items(order, items, payment)

    logger.info(
        "Order created",
        order_id=order.id,
        customer_id=customer_id,
        total=str(total),
        items=len(items),
        actor_id=actor.id,
    )
    return order


def get_orders_for_customer(db: Session, customer_id: str) -> List[Order]:
    return SQLAlchemyOrderRepository(db).list_by_customer(customer_id)


def get_all_orders(db: Session, actor: Actor, status: Optional[OrderStatus] = None) -> List[Order]:
    require_admin(actor, "get_all_orders")
    return SQLAlchemyOrderRepository(db).list_all(status.value if status else None)


def get_order(db: Session, order_id: int, actor: Actor) -> Order:
    order = _load_order(db, order_id)
    require_owner_or_admin_hidden(actor, order.customer_id, "get_order", ORDER_NOT_FOUND)
    return order


def update_order(db: Session, order_id: int, data: OrderUpdate, actor: Actor) -> Order:
    """Edit delivery details and notes.

    Customers may only edit their own orders while still pending, and can never
    move an order to another customer.
    """
    repo = SQLAlchemyOrderRepository(db)
    order = _load_order(db, order_id)
    require_owner_or_admin_hidden(actor, order.customer_id, "update_order", ORDER_NOT_FOUND)
    repo.check_version(order, data.version_id)

    if not actor.is_admin and order.status != OrderStatus.PENDENTE.value:
        raise BusinessRuleViolationException(
            "Pedido não pode mais ser alterado", {"status": "Somente pedidos pendentes podem ser editados."}
        )

    changes = data.model_dump(exclude_unset=True, exclude={"version_id"})
    if not actor.is_admin:
        changes.pop("customer_id", None)
    elif changes.get("customer_id"):
        if SQLAlchemyCustomerRepository(db).get_by_id(changes["customer_id"]) is None:
            raise BusinessRuleViolationException(
                "Cliente inexistente", {"customer_id": "O cliente informado não existe."}
            )
    else:
        changes.pop("customer_id", None)

    delivery_type = DeliveryType(changes.get("delivery_type") or order.delivery_type)
    delivery_address = changes.get("delivery_address", order.delivery_address)
    _validate_delivery(delivery_type, delivery_address)
    if "delivery_type" in changes:
        changes["delivery_type"] = delivery_type.value
    if delivery_type == DeliveryType.RETIRADA:
        changes["delivery_address"] = None

    with transaction(db):
        order = repo.update(order, changes)
    logger.info("Order updated", order_id=order.id, fields=sorted(changes), actor_id=actor.id)
    return order


def update_order_status(
    db: Session,
    order_id: int,
    new_status: OrderStatus,
    actor: Actor,
    expected_version: Optional[int] = None,
) -> Order:
    """Administrators move an order along the status graph."""
    require_admin(actor, "update_order_status")
    repo = SQLAlchemyOrderRepository(db)
    order = _load_order(db, order_id)
    repo.check_version(order, expected_version)

    new_status = OrderStatus(new_status)
    current = OrderStatus(order.status)
    if not can_transition(current, new_status):
        logger.warning(
            "Rejected order status transition",
            order_id=order.id,
            current=current.value,
            requested=new_status.value,
        )
        raise InvalidStatusTransitionException(current.value, new_status.value)

    with transaction(db):
        order = repo.update(order, {"status": new_status.value})
    logger.info(
        "Order status changed",
        order_id=order.id,
        previous=current.value,
        status=new_status.value,
        actor_id=actor.id,
    )
    return order


def delete_order(db: Session, order_id: int, actor: Actor) -> None:
    """Administrators delete an order together with its items and payment."""
    require_admin(actor, "delete_order")
    repo = SQLAlchemyOrderRepository(db)
    order = _load_order(db, order_id)

    with transaction(db):
        repo.delete_cascade(order)
    logger.info("Order deleted", order_id=order_id, actor_id=actor.id)
