"""Categories API routes."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.services import product_service
from app.application.services.authorization import Actor
from app.domain.schemas.product import CategoryCreate, CategoryRead, CategoryUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryRead])
def list_categories(db: Session = Depends(get_db)):
    return product_service.get_categories(db)


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return product_service.get_category(db, category_id)


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return product_service.create_category(db, body, actor)


@router.put("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return product_service.update_category(db, category_id, body, actor)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    product_service.delete_category(db, category_id, actor)
