"""Startup seeding: roles and the default administrator account."""

import structlog
from sqlalchemy.orm import Session

from app.application.services.auth_service import hash_password
from app.config import get_settings
from app.core.clock import utcnow
from app.domain.enums import RoleName
from app.domain.models.customer import Administrator, Customer
from app.domain.models.user import User
from app.infrastructure.database import transaction
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


def seed_database(db: Session) -> None:
    """Create whatever is missing; safe to run on every startup."""
    settings = get_settings()
    repo = SQLAlchemyUserRepository(db)

    with transaction(db):
        roles = [repo.get_or_create_role(role.value) for role in RoleName]

        admin = repo.get_by_email(settings.ADMIN_EMAIL)
        if admin is None:
            admin = User(
                name=settings.ADMIN_NAME,
                email=settings.ADMIN_EMAIL,
                password_hash=hash_password(settings.ADMIN_PASSWORD),
                created_at=utcnow(),
                is_active=True,
            )
            db.add(admin)
            repo.flush(admin)
            repo.set_roles(admin, roles)
            logger.info("Default administrator created", email=admin.email)

        # The admin also shops, so it carries a customer profile too
        if db.get(Customer, admin.id) is None:
            db.add(Customer(id=admin.id))
        if db.get(Administrator, admin.id) is None:
            db.add(Administrator(id=admin.id, job_title="Administrador", hired_at=utcnow()))
        repo.flush(admin)
