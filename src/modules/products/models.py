"""Product model: the goods a bakery order is made of.

- Names are unique among live products; the service turns a clash into
  a user-facing denial. A deleted product frees its name.
- Price must be greater than zero.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel) keeps
  historic order lines pointing at a real row.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel


class Product(SoftDeleteModel):
    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["name"],
                condition=models.Q(deleted_at__isnull=True),
                name="products_name_alive_uniq",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.name
