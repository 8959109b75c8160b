"""Product DRF serializers."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read/write serializer for products.

    Name uniqueness is left to the database so that the service can
    answer with its own message.
    """

    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )

    class Meta:
        model = Product
        fields = ["id", "name", "price"]
        read_only_fields = ["id"]

    def apply_to(self, product: Product) -> Product:
        for field, value in self.validated_data.items():
            setattr(product, field, value)
        return product
