"""Product service: catalog queries and administration of products and categories."""

from typing import List

import structlog
from sqlalchemy.orm import Session

from app.application.services.authorization import Actor, require_admin
from app.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from app.domain.models.product import Category, Product
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductFilter,
    ProductUpdate,
)
from app.infrastructure.database import transaction
from app.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository
from app.infrastructure.repositories.product_repository import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyProductRepository,
)
from app.infrastructure.repositories.review_repository import SQLAlchemyReviewRepository

logger = structlog.get_logger(__name__)


def get_products(repo: ProductRepository, filters: ProductFilter) -> dict:
    """Get products with filtering and pagination."""
    return repo.get_with_filters(filters)


def get_product(db: Session, product_id: int) -> Product:
    product = SQLAlchemyProductRepository(db).get_by_id(product_id)
    if product is None:
        raise EntityNotFoundException("Produto não encontrado")
    return product


def _ensure_category(db: Session, category_id: int) -> None:
    if SQLAlchemyCategoryRepository(db).get_by_id(category_id) is None:
        raise BusinessRuleViolationException(
            "Categoria inexistente", {"category_id": "A categoria informada não existe."}
        )


def create_product(db: Session, data: ProductCreate, actor: Actor) -> Product:
    require_admin(actor, "create_product")
    _ensure_category(db, data.category_id)

    with transaction(db):
        product = SQLAlchemyProductRepository(db).create(data)
    logger.info("Product created", product_id=product.id, name=product.name, actor_id=actor.id)
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate, actor: Actor) -> Product:
    require_admin(actor, "update_product")
    repo = SQLAlchemyProductRepository(db)
    product = get_product(db, product_id)
    repo.check_version(product, data.version_id)

    changes = data.model_dump(exclude_unset=True, exclude={"version_id"})
    for key in ("name", "price", "is_available", "category_id"):
        if key in changes and changes[key] is None:
            del changes[key]
    if "category_id" in changes:
        _ensure_category(db, changes["category_id"])

    with transaction(db):
        product = repo.update(product, changes)
    logger.info("Product updated", product_id=product.id, fields=sorted(changes), actor_id=actor.id)
    return product


def delete_product(db: Session, product_id: int, actor: Actor) -> None:
    require_admin(actor, "delete_product")
    repo = SQLAlchemyProductRepository(db)
    product = get_product(db, product_id)
    if SQLAlchemyOrderRepository(db).product_is_referenced(product.id):
        raise BusinessRuleViolationException(
            "Produto possui pedidos", {"product_id": "Produtos já vendidos não podem ser excluídos."}
        )

    with transaction(db):
        removed_reviews = SQLAlchemyReviewRepository(db).delete_for_product(product.id)
        repo.delete(product)
    logger.info("Product deleted", product_id=product_id, reviews=removed_reviews, actor_id=actor.id)


def get_categories(db: Session) -> List[Category]:
    return SQLAlchemyCategoryRepository(db).list(limit=1000)


def get_category(db: Session, category_id: int) -> Category:
    category = SQLAlchemyCategoryRepository(db).get_by_id(category_id)
    if category is None:
        raise EntityNotFoundException("Categoria não encontrada")
    return category


def create_category(db: Session, data: CategoryCreate, actor: Actor) -> Category:
    require_admin(actor, "create_category")
    with transaction(db):
        category = SQLAlchemyCategoryRepository(db).create(data)
    logger.info("Category created", category_id=category.id, name=category.name, actor_id=actor.id)
    return category


def update_category(db: Session, category_id: int, data: CategoryUpdate, actor: Actor) -> Category:
    require_admin(actor, "update_category")
    repo = SQLAlchemyCategoryRepository(db)
    category = get_category(db, category_id)
    repo.check_version(category, data.version_id)

    changes = data.model_dump(exclude_unset=True, exclude={"version_id"})
    if "name" in changes and changes["name"] is None:
        del changes["name"]

    with transaction(db):
        category = repo.update(category, changes)
    logger.info("Category updated", category_id=category.id, actor_id=actor.id)
    return category


def delete_category(db: Session, category_id: int, actor: Actor) -> None:
    require_admin(actor, "delete_category")
    repo = SQLAlchemyCategoryRepository(db)
    category = get_category(db, category_id)
    if repo.has_products(category.id):
        raise BusinessRuleViolationException(
            "Categoria possui produtos", {"category_id": "Remova ou mova os produtos antes de excluir."}
        )

    with transaction(db):
        repo.delete(category)
    logger.info("Category deleted", category_id=category_id, actor_id=actor.id)
