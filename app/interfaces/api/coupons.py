"""Coupons API routes (administrators only)."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services import coupon_service
from app.application.services.authorization import Actor
from app.domain.schemas.coupon import CouponCreate, CouponRead, CouponUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor

router = APIRouter(prefix="/api/coupons", tags=["Coupons"])


@router.get("", response_model=List[CouponRead])
def list_coupons(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return coupon_service.list_coupons(db, actor)


@router.get("/{coupon_id}", response_model=CouponRead)
def get_coupon(coupon_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return coupon_service.get_coupon(db, coupon_id, actor)


@router.post("", response_model=CouponRead, status_code=status.HTTP_201_CREATED)
def create_coupon(
    body: CouponCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return coupon_service.create_coupon(db, body, actor)


@router.put("/{coupon_id}", response_model=CouponRead)
def update_coupon(
    coupon_id: int,
    body: CouponUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return coupon_service.update_coupon(db, coupon_id, body, actor)


@router.delete("/{coupon_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_coupon(coupon_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    coupon_service.delete_coupon(db, coupon_id, actor)
