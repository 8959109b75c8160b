"""Product catalogue service.

Composes the generic ``CrudService``.  A duplicate product name surfaces
from the store as an ``IntegrityError``; when a live product really holds
the name it is replaced here by a ``PolicyDenied`` with a fixed message,
discarding the technical detail.  Any other integrity failure propagates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import IntegrityError

from modules.core.exceptions import PolicyDenied
from modules.core.services import CrudService
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

DUPLICATE_PRODUCT_NAME = (
    "A product with this name already exists. "
    "Please choose a unique name for the product."
)


class ProductService:
    """Application service for the product catalogue."""

    def __init__(self, repository: IProductRepository) -> None:
        self._repository = repository
        self._crud: CrudService[Product] = CrudService(
            repository, factory=Product, not_found=ProductNotFound
        )

    def find_any_matching(
        self, text_filter: Optional[str], page_request: PageRequest
    ) -> Page:
        return self._crud.find_any_matching(text_filter, page_request)

    def count_any_matching(self, text_filter: Optional[str]) -> int:
        return self._crud.count_any_matching(text_filter)

    def load(self, id: str) -> Product:
        return self._crud.load(id)

    def create_new(self, current_user) -> Product:
        return self._crud.create_new(current_user)

    def save(self, current_user, entity: Product) -> Product:
        try:
            return self._crud.save(current_user, entity)
        except IntegrityError:
            if not self._repository.name_taken(entity.name, exclude_id=entity.pk):
                raise
            logger.warning("product.duplicate_name", name=entity.name)
            raise PolicyDenied(DUPLICATE_PRODUCT_NAME) from None

    def delete(self, current_user, entity: Product) -> None:
        self._crud.delete(current_user, entity)
