"""Products API routes — public catalog listing and admin product management."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.services import product_service
from app.application.services.authorization import Actor
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductCreate, ProductFilter, ProductRead, ProductUpdate
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_actor
from app.interfaces.deps import get_product_repository

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("")
def list_products(
    category_id: Optional[int] = None,
    only_available: bool = False,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: ProductRepository = Depends(get_product_repository),
):
    filters = ProductFilter(
        category_id=category_id,
        only_available=only_available,
        search=search,
        page=page,
        page_size=page_size,
    )
    result = product_service.get_products(repo, filters)
    result["items"] = [ProductRead.model_validate(p) for p in result["items"]]
    return result


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return product_service.get_product(db, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return product_service.create_product(db, body, actor)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    body: ProductUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return product_service.update_product(db, product_id, body, actor)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    product_service.delete_product(db, product_id, actor)
