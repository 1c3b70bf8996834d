"""Payments API routes."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services import payment_service
from app.application.services.authorization import Actor
from app.domain.schemas.order import PaymentCreate, PaymentRead, PaymentUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.get("/mine", response_model=List[PaymentRead])
def my_payments(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return payment_service.get_my_payments(db, actor)


@router.get("", response_model=List[PaymentRead])
def list_payments(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return payment_service.get_all_payments(db, actor)


@router.get("/{payment_id}", response_model=PaymentRead)
def get_payment(payment_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return payment_service.get_payment(db, payment_id, actor)


@router.post("", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def create_payment(
    body: PaymentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return payment_service.create_payment(db, body, actor)


@router.put("/{payment_id}", response_model=PaymentRead)
def update_payment(
    payment_id: int,
    body: PaymentUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return payment_service.update_payment(db, payment_id, body, actor)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(payment_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    payment_service.delete_payment(db, payment_id, actor)
