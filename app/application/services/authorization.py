"""Authorization: the acting user and the per-operation permission checks.

Every service call receives an explicit Actor built from the database on each
request, so permissions are evaluated again on every mutation.
"""

from dataclasses import dataclass, field

import structlog

from app.core.exceptions import EntityNotFoundException, ForbiddenException
from app.domain.enums import RoleName

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    id: str
    roles: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=user.id, roles=frozenset(user.role_names))

    @property
    def is_admin(self) -> bool:
        return RoleName.ADMINISTRADOR.value in self.roles

    @property
    def is_customer(self) -> bool:
        return RoleName.CLIENTE.value in self.roles


def require_admin(actor: Actor, action: str) -> None:
    if not actor.is_admin:
        logger.warning("Permission denied", actor_id=actor.id, action=action)
        raise ForbiddenException("Apenas administradores podem executar esta ação")


def require_authenticated_role(actor: Actor, action: str) -> None:
    """Customers and administrators only."""
    if not (actor.is_admin or actor.is_customer):
        logger.warning("Permission denied", actor_id=actor.id, action=action)
        raise ForbiddenException("Usuário sem papel autorizado")


def can_act_on(actor: Actor, owner_id: str) -> bool:
    return actor.is_admin or owner_id == actor.id


def require_owner_or_admin(actor: Actor, owner_id: str, action: str) -> None:
    if not can_act_on(actor, owner_id):
        logger.warning("Permission denied", actor_id=actor.id, action=action, owner_id=owner_id)
        raise ForbiddenException()


def require_owner_or_admin_hidden(actor: Actor, owner_id: str, action: str, message: str) -> None:
    """Like require_owner_or_admin, but answers as if the record did not exist."""
    if not can_act_on(actor, owner_id):
        logger.warning("Permission denied", actor_id=actor.id, action=action, owner_id=owner_id)
        raise EntityNotFoundException(message)
