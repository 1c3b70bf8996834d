"""User administration: provisioning, role assignment and removal of accounts.

Every account carries at least one role. The role decides which profile row
exists next to the identity record: a Customer for Cliente, an Administrator
for Administrador.
"""

from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from app.application.services.auth_service import create_user
from app.application.services.authorization import Actor, require_admin
from app.core.clock import utcnow
from app.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from app.domain.enums import RoleName
from app.domain.models.customer import Administrator, Customer
from app.domain.models.user import User
from app.domain.schemas.user import AdminUserCreate, AdminUserUpdate
from app.infrastructure.database import transaction
from app.infrastructure.repositories.user_repository import (
    SQLAlchemyAdministratorRepository,
    SQLAlchemyCustomerRepository,
    SQLAlchemyUserRepository,
)

logger = structlog.get_logger(__name__)


def _ensure_profile(db: Session, user: User, role: str, job_title: Optional[str] = None) -> None:
    if role == RoleName.CLIENTE.value:
        if SQLAlchemyCustomerRepository(db).get_by_id(user.id) is None:
            db.add(Customer(id=user.id))
    elif role == RoleName.ADMINISTRADOR.value:
        if SQLAlchemyAdministratorRepository(db).get_by_id(user.id) is None:
            db.add(Administrator(id=user.id, job_title=job_title or "", hired_at=utcnow()))


def _load_user(db: Session, user_id: str) -> User:
    user = SQLAlchemyUserRepository(db).get_by_id(user_id)
    if user is None:
        raise EntityNotFoundException("Usuário não encontrado")
    return user


def list_users(db: Session, actor: Actor, skip: int = 0, limit: int = 100) -> List[User]:
    require_admin(actor, "list_users")
    return SQLAlchemyUserRepository(db).list(skip=skip, limit=limit)


def get_user(db: Session, user_id: str, actor: Actor) -> User:
    require_admin(actor, "get_user")
    return _load_user(db, user_id)


def create_user_with_role(db: Session, data: AdminUserCreate, actor: Actor) -> User:
    require_admin(actor, "create_user")
    repo = SQLAlchemyUserRepository(db)
    role_name = RoleName(data.role).value

    with transaction(db):
        user = create_user(db, data.name, data.email, data.password, data.phone)
        repo.set_roles(user, [repo.get_or_create_role(role_name)])
        _ensure_profile(db, user, role_name, data.job_title)
        repo.flush(user)

    logger.info("User created", user_id=user.id, role=role_name, actor_id=actor.id)
    return user


def update_user(db: Session, user_id: str, data: AdminUserUpdate, actor: Actor) -> User:
    """Edit contact data and replace the user's role."""
    require_admin(actor, "update_user")
    repo = SQLAlchemyUserRepository(db)
    user = _load_user(db, user_id)

    if not data.role:
        logger.warning("User edit without role rejected", user_id=user.id, actor_id=actor.id)
        raise BusinessRuleViolationException(
            "Selecione um papel", {"role": "O usuário precisa de ao menos um papel."}
        )
    role = repo.get_role(data.role)
    if role is None:
        raise BusinessRuleViolationException("Papel inexistente", {"role": f"O papel {data.role} não existe."})

    if data.email != user.email and repo.get_by_email(data.email) is not None:
        raise BusinessRuleViolationException("Email já cadastrado", {"email": "Este email já está em uso."})

    with transaction(db):
        repo.update(user, {"name": data.name, "email": data.email, "phone": data.phone})
        repo.set_roles(user, [role])
        _ensure_profile(db, user, role.name)
        repo.flush(user)

    logger.info("User updated", user_id=user.id, role=role.name, actor_id=actor.id)
    return user


def delete_user(db: Session, user_id: str, actor: Actor) -> None:
    require_admin(actor, "delete_user")
    if user_id == actor.id:
        raise BusinessRuleViolationException(
            "Você não pode excluir sua própria conta", {"user_id": "Operação não permitida."}
        )
    repo = SQLAlchemyUserRepository(db)
    user = _load_user(db, user_id)

    with transaction(db):
        repo.delete_cascade(user)
    logger.info("User deleted", user_id=user_id, actor_id=actor.id)


def list_administrators(db: Session, actor: Actor) -> List[Administrator]:
    require_admin(actor, "list_administrators")
    return SQLAlchemyAdministratorRepository(db).list()
