"""Payment service: customers see their own payments, administrators manage all of them."""

from typing import List

import structlog
from sqlalchemy.orm import Session

from app.application.services.authorization import Actor, require_admin, require_owner_or_admin_hidden
from app.core.clock import to_utc_naive, utcnow
from app.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from app.domain.models.order import Payment
from app.domain.schemas.order import PaymentCreate, PaymentUpdate
from app.infrastructure.database import transaction
from app.infrastructure.repositories.order_repository import (
    SQLAlchemyOrderRepository,
    SQLAlchemyPaymentRepository,
)

logger = structlog.get_logger(__name__)

PAYMENT_NOT_FOUND = "Pagamento não encontrado"


def _load_payment(db: Session, payment_id: int) -> Payment:
    payment = SQLAlchemyPaymentRepository(db).get_by_id(payment_id)
    if payment is None:
        raise EntityNotFoundException(PAYMENT_NOT_FOUND)
    return payment


def get_my_payments(db: Session, actor: Actor) -> List[Payment]:
    return SQLAlchemyPaymentRepository(db).list_by_customer(actor.id)


def get_all_payments(db: Session, actor: Actor) -> List[Payment]:
    require_admin(actor, "get_all_payments")
    return SQLAlchemyPaymentRepository(db).list_all()


def get_payment(db: Session, payment_id: int, actor: Actor) -> Payment:
    payment = _load_payment(db, payment_id)
    require_owner_or_admin_hidden(actor, payment.order.customer_id, "get_payment", PAYMENT_NOT_FOUND)
    return payment


def create_payment(db: Session, data: PaymentCreate, actor: Actor) -> Payment:
    require_admin(actor, "create_payment")
    repo = SQLAlchemyPaymentRepository(db)
    if SQLAlchemyOrderRepository(db).get_by_id(data.order_id) is None:
        raise EntityNotFoundException("Pedido não encontrado")
    if repo.get_by_order_id(data.order_id) is not None:
        raise BusinessRuleViolationException(
            "Pedido já possui pagamento", {"order_id": "Cada pedido aceita um único pagamento."}
        )

    with transaction(db):
        payment = repo.create({
            **data.model_dump(),
            "status": data.status.value,
            "paid_at": to_utc_naive(data.paid_at) if data.paid_at else utcnow(),
        })
    logger.info(
        "Payment created",
        payment_id=payment.id,
        order_id=payment.order_id,
        amount=str(payment.amount),
        actor_id=actor.id,
    )
    return payment


def update_payment(db: Session, payment_id: int, data: PaymentUpdate, actor: Actor) -> Payment:
    require_admin(actor, "update_payment")
    repo = SQLAlchemyPaymentRepository(db)
    payment = _load_payment(db, payment_id)
    repo.check_version(payment, data.version_id)

    changes = data.model_dump(exclude_unset=True, exclude={"version_id"})
    for key in ("method", "amount", "status", "paid_at"):
        if key in changes and changes[key] is None:
            del changes[key]
    if "status" in changes:
        changes["status"] = changes["status"].value
    if "paid_at" in changes:
        changes["paid_at"] = to_utc_naive(changes["paid_at"])

    with transaction(db):
        payment = repo.update(payment, changes)
    logger.info("Payment updated", payment_id=payment.id, fields=sorted(changes), actor_id=actor.id)
    return payment


def delete_payment(db: Session, payment_id: int, actor: Actor) -> None:
    require_admin(actor, "delete_payment")
    repo = SQLAlchemyPaymentRepository(db)
    payment = _load_payment(db, payment_id)

    with transaction(db):
        repo.delete(payment)
    logger.info("Payment deleted", payment_id=payment_id, actor_id=actor.id)
