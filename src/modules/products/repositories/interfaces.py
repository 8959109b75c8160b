"""Product repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IFilterableRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IFilterableRepository["Product"]):
    """Repository contract for the product catalogue.

    Free-text search is a case-insensitive substring match on the name.
    ``get_by_id`` ignores soft-deleted products.
    """

    @abstractmethod
    def name_taken(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """Whether another live product already uses *name*."""
