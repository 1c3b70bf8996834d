"""Customers API routes — own profile and the admin customer list."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.services import customer_service
from app.application.services.authorization import Actor
from app.domain.schemas.user import CustomerRead, CustomerUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor

router = APIRouter(prefix="/api/customers", tags=["Customers"])


@router.get("/me", response_model=CustomerRead)
def my_profile(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return customer_service.get_my_profile(db, actor)


@router.put("/me", response_model=CustomerRead)
def update_my_profile(
    body: CustomerUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return customer_service.update_my_profile(db, body, actor)


@router.get("", response_model=List[CustomerRead])
def list_customers(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return customer_service.list_customers(db, actor, skip, limit)
