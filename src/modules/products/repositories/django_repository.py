"""Django ORM implementation of the Product repository.

Error handling follows the Null Object pattern: ``get_by_id`` returns
``None`` instead of raising; the Service Layer decides how to translate a
missing entity.  Store errors (e.g. ``IntegrityError`` on a duplicate
name) propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.pagination import paginate
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def find_all(self, page_request: PageRequest) -> Page:
        return paginate(Product.objects.alive(), page_request)

    def find_matching(self, text: str, page_request: PageRequest) -> Page:
        return paginate(
            Product.objects.alive().filter(name__icontains=text), page_request
        )

    def count_matching(self, text: str) -> int:
        return Product.objects.alive().filter(name__icontains=text).count()

    def count(self) -> int:
        return Product.objects.alive().count()

    def name_taken(self, name: str, exclude_id: Optional[str] = None) -> bool:
        live = Product.objects.alive().filter(name=name)
        if exclude_id is not None:
            live = live.exclude(id=exclude_id)
        return live.exists()

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        entity.save()
        logger.info("product.saved", product_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, entity: Product) -> None:
        entity.delete()
        logger.info("product.soft_deleted", product_id=str(entity.id))
