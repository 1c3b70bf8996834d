"""
Base Repository Interface.
Defines the standard contract for data access operations.
Writes are flushed, never committed: the caller owns the transaction.
"""

from typing import Any, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: Any) -> Optional[T]:
        """Get a single entity by primary key."""
        ...

    def exists(self, id: Any) -> bool:
        """Tell whether a row with this primary key is stored."""
        ...

    def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """List entities with pagination."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Update an existing entity."""
        ...

    def delete(self, db_obj: T) -> None:
        """Delete an entity."""
        ...

    def check_version(self, db_obj: T, expected: Optional[int]) -> None:
        """Raise a conflict when the caller edited an older version of the row."""
        ...
