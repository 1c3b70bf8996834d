"""Orders API routes — place, list, edit, move through statuses and delete orders."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services import order_service
from app.application.services.authorization import Actor
from app.domain.enums import OrderStatus
from app.domain.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate, OrderUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return order_service.create_order(db, body, actor)


@router.get("/mine", response_model=List[OrderRead])
def my_orders(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return order_service.get_orders_for_customer(db, actor.id)


@router.get("", response_model=List[OrderRead])
def list_orders(
    status_filter: Optional[OrderStatus] = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return order_service.get_all_orders(db, actor, status_filter)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return order_service.get_order(db, order_id, actor)


@router.put("/{order_id}", response_model=OrderRead)
def update_order(
    order_id: int,
    body: OrderUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return order_service.update_order(db, order_id, body, actor)


@router.patch("/{order_id}/status", response_model=OrderRead)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return order_service.update_order_status(db, order_id, body.status, actor, body.version_id)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    order_service.delete_order(db, order_id, actor)
