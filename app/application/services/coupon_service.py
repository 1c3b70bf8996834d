"""Coupon service: administration of coupons and discount rules."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from app.application.services.authorization import Actor, require_admin
from app.core.clock import to_utc_naive, utcnow
from app.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from app.domain.enums import DiscountType
from app.domain.models.coupon import Coupon
from app.domain.models.order import Order
from app.domain.schemas.coupon import CouponCreate, CouponUpdate
from app.infrastructure.database import transaction
from app.infrastructure.repositories.coupon_repository import SQLAlchemyCouponRepository
from app.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def _validate_rules(code: str, discount_type: str, value: Decimal, starts_at: datetime, ends_at: datetime) -> None:
    errors = {}
    if not code or not code.strip():
        errors["code"] = "O código é obrigatório."
    if value is None or value <= 0:
        errors["discount_value"] = "O valor do desconto deve ser positivo."
    elif discount_type == DiscountType.PERCENTUAL.value and value > 100:
        errors["discount_value"] = "Desconto percentual não pode passar de 100."
    if starts_at and ends_at and ends_at < starts_at:
        errors["ends_at"] = "A data final deve ser posterior à data inicial."
    if errors:
        raise BusinessRuleViolationException("Cupom inválido", errors)


def compute_discount(coupon: Coupon, subtotal: Decimal) -> Decimal:
    """Discount granted by a coupon, never more than the subtotal."""
    value = Decimal(coupon.discount_value)
    if coupon.discount_type == DiscountType.PERCENTUAL.value:
        discount = subtotal * value / Decimal("100")
    else:
        discount = value
    discount = min(discount, subtotal)
    return discount.quantize(CENT, rounding=ROUND_HALF_UP)


def ensure_usable(db: Session, coupon: Coupon, now: Optional[datetime] = None) -> None:
    """Raise unless the coupon is active, in its window and not exhausted."""
    now = now or utcnow()
    if not coupon.is_active:
        raise BusinessRuleViolationException("Cupom inativo", {"coupon_id": "O cupom não está ativo."})
    if now < coupon.starts_at or now > coupon.ends_at:
        raise BusinessRuleViolationException(
            "Cupom fora do período de validade",
            {"coupon_id": "O cupom não está dentro do período de validade."},
        )
    if coupon.max_uses is not None:
        used = SQLAlchemyOrderRepository(db).count_coupon_uses(coupon.id)
        if used >= coupon.max_uses:
            raise BusinessRuleViolationException(
                "Cupom esgotado",
                {"coupon_id": "O cupom atingiu o número máximo de usos."},
            )


def list_coupons(db: Session, actor: Actor) -> List[Coupon]:
    require_admin(actor, "list_coupons")
    return db.query(Coupon).order_by(Coupon.ends_at.desc()).all()


def get_coupon(db: Session, coupon_id: int, actor: Actor) -> Coupon:
    require_admin(actor, "get_coupon")
    coupon = SQLAlchemyCouponRepository(db).get_by_id(coupon_id)
    if coupon is None:
        raise EntityNotFoundException("Cupom não encontrado")
    return coupon


def create_coupon(db: Session, data: CouponCreate, actor: Actor) -> Coupon:
    require_admin(actor, "create_coupon")
    repo = SQLAlchemyCouponRepository(db)
    starts_at, ends_at = to_utc_naive(data.starts_at), to_utc_naive(data.ends_at)
    _validate_rules(data.code, data.discount_type.value, data.discount_value, starts_at, ends_at)
    if repo.get_by_code(data.code) is not None:
        raise BusinessRuleViolationException("Código de cupom já cadastrado", {"code": "Código já existe."})

    with transaction(db):
        coupon = repo.create({
            **data.model_dump(),
            "discount_type": data.discount_type.value,
            "starts_at": starts_at,
            "ends_at": ends_at,
        })
    logger.info("Coupon created", coupon_id=coupon.id, code=coupon.code, actor_id=actor.id)
    return coupon


def update_coupon(db: Session, coupon_id: int, data: CouponUpdate, actor: Actor) -> Coupon:
    require_admin(actor, "update_coupon")
    repo = SQLAlchemyCouponRepository(db)
    coupon = repo.get_by_id(coupon_id)
    if coupon is None:
        raise EntityNotFoundException("Cupom não encontrado")
    repo.check_version(coupon, data.version_id)

    changes = data.model_dump(exclude_unset=True)
    if "discount_type" in changes and changes["discount_type"] is not None:
        changes["discount_type"] = changes["discount_type"].value
    for key in ("starts_at", "ends_at"):
        if key in changes:
            changes[key] = to_utc_naive(changes[key])

    _validate_rules(
        changes.get("code", coupon.code),
        changes.get("discount_type", coupon.discount_type),
        changes.get("discount_value", coupon.discount_value),
        changes.get("starts_at", coupon.starts_at),
        changes.get("ends_at", coupon.ends_at),
    )
    new_code = changes.get("code")
    if new_code and new_code != coupon.code:
        other = repo.get_by_code(new_code)
        if other is not None:
            raise BusinessRuleViolationException("Código de cupom já cadastrado", {"code": "Código já existe."})

    with transaction(db):
        coupon = repo.update(coupon, changes)
    logger.info("Coupon updated", coupon_id=coupon.id, actor_id=actor.id)
    return coupon


def delete_coupon(db: Session, coupon_id: int, actor: Actor) -> None:
    """Delete a coupon; orders that used it keep their totals and lose the link."""
    require_admin(actor, "delete_coupon")
    repo = SQLAlchemyCouponRepository(db)
    coupon = repo.get_by_id(coupon_id)
    if coupon is None:
        raise EntityNotFoundException("Cupom não encontrado")

    with transaction(db):
        for order in db.query(Order).filter(Order.coupon_id == coupon.id).all():
            order.coupon = None
        repo.delete(coupon)
    logger.info("Coupon deleted", coupon_id=coupon_id, actor_id=actor.id)
