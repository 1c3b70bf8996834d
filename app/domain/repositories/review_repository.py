"""
Review Repository Interface.
"""

from typing import List, Optional

from app.domain.models.review import Review
from app.domain.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Interface for Review-specific operations."""

    def list_filtered(self, product_id: Optional[int] = None) -> List[Review]:
        """Public listing, optionally restricted to one product."""
        ...

    def list_reported(self) -> List[Review]:
        """Reviews flagged by customers and awaiting an administrator."""
        ...

    def list_by_customer(self, customer_id: str) -> List[Review]:
        ...

    def delete_for_product(self, product_id: int) -> int:
        """Remove every review of a product; returns how many were removed."""
        ...
