"""
SQLAlchemy Implementation of the User, Customer and Administrator Repositories.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.domain.models.customer import Administrator, Customer
from app.domain.models.review import Review
from app.domain.models.user import Role, User
from app.domain.repositories.user_repository import (
    AdministratorRepository,
    CustomerRepository,
    UserRepository,
)
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository
from app.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def list(self, skip: int = 0, limit: int = 100) -> List[User]:
        return self.db.query(User).order_by(User.email).offset(skip).limit(limit).all()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_role(self, name: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == name).first()

    def get_or_create_role(self, name: str) -> Role:
        role = self.get_role(name)
        if role is None:
            role = Role(name=name)
            self.db.add(role)
            self.flush(role)
        return role

    def set_roles(self, user: User, roles: List[Role]) -> User:
        user.roles = list(roles)
        self.flush(user)
        return user

    def delete_cascade(self, user: User) -> None:
        orders = SQLAlchemyOrderRepository(self.db)
        for order in orders.list_by_customer(user.id):
            orders.delete_cascade(order)

        for review in self.db.query(Review).filter(Review.customer_id == user.id).all():
            self.db.delete(review)
        # Review has no mapped path to Customer, so its rows must be gone first
        self.flush(user)

        for profile_model in (Customer, Administrator):
            profile = self.db.get(profile_model, user.id)
            if profile is not None:
                self.db.delete(profile)
        self.flush(user)

        user.roles = []
        self.db.delete(user)
        self.flush(user)


class SQLAlchemyCustomerRepository(SQLAlchemyRepository[Customer], CustomerRepository):
    """Customer repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Customer)


class SQLAlchemyAdministratorRepository(SQLAlchemyRepository[Administrator], AdministratorRepository):
    """Administrator repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Administrator)
