"""Customer profiles: address data kept alongside the identity record."""

from typing import List

import structlog
from sqlalchemy.orm import Session

from app.application.services.authorization import Actor, require_admin
from app.core.exceptions import EntityNotFoundException
from app.domain.models.customer import Customer
from app.domain.schemas.user import CustomerUpdate
from app.infrastructure.database import transaction
from app.infrastructure.repositories.user_repository import SQLAlchemyCustomerRepository

logger = structlog.get_logger(__name__)


def get_my_profile(db: Session, actor: Actor) -> Customer:
    customer = SQLAlchemyCustomerRepository(db).get_by_id(actor.id)
    if customer is None:
        raise EntityNotFoundException("Perfil de cliente não encontrado")
    return customer


def update_my_profile(db: Session, data: CustomerUpdate, actor: Actor) -> Customer:
    repo = SQLAlchemyCustomerRepository(db)
    customer = get_my_profile(db, actor)
    repo.check_version(customer, data.version_id)

    changes = data.model_dump(exclude_unset=True, exclude={"version_id"})
    with transaction(db):
        customer = repo.update(customer, changes)
    logger.info("Customer profile updated", customer_id=customer.id, fields=sorted(changes))
    return customer


def list_customers(db: Session, actor: Actor, skip: int = 0, limit: int = 100) -> List[Customer]:
    require_admin(actor, "list_customers")
    return SQLAlchemyCustomerRepository(db).list(skip=skip, limit=limit)
