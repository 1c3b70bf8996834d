"""
User Repository Interfaces.
Identity records, roles and the customer/administrator profiles sharing their key.
"""

from typing import List, Optional

from app.domain.models.customer import Administrator, Customer
from app.domain.models.user import Role, User
from app.domain.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def get_role(self, name: str) -> Optional[Role]:
        ...

    def get_or_create_role(self, name: str) -> Role:
        ...

    def set_roles(self, user: User, roles: List[Role]) -> User:
        """Replace the user's role set."""
        ...

    def delete_cascade(self, user: User) -> None:
        """Delete the user with its profiles, and the customer's orders and reviews."""
        ...


class CustomerRepository(BaseRepository[Customer]):
    """Interface for Customer-specific operations."""


class AdministratorRepository(BaseRepository[Administrator]):
    """Interface for Administrator-specific operations."""
