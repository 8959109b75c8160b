"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import DEFAULT_DUE_TIME, OrderState
from modules.orders.dtos import OrderFormDTO, OrderItemFormDTO
from modules.orders.models import Customer, Order, OrderHistoryItem, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class OrderItemFormSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    comment = serializers.CharField(required=False, default="", allow_blank=True)


class OrderFormSerializer(serializers.Serializer):
    """Validates the order editor payload (create and update)."""

    customer_full_name = serializers.CharField(max_length=255)
    customer_phone_number = serializers.CharField(
        max_length=20, required=False, default="", allow_blank=True
    )
    customer_details = serializers.CharField(
        required=False, default="", allow_blank=True
    )
    due_date = serializers.DateField()
    due_time = serializers.TimeField(required=False, default=DEFAULT_DUE_TIME)
    state = serializers.ChoiceField(
        choices=OrderState.choices, required=False, allow_null=True, default=None
    )
    items = OrderItemFormSerializer(many=True, allow_empty=False)

    def to_dto(self) -> OrderFormDTO:
        data = self.validated_data
        return OrderFormDTO(
            customer_full_name=data["customer_full_name"],
            customer_phone_number=data["customer_phone_number"],
            customer_details=data["customer_details"],
            due_date=data["due_date"],
            due_time=data["due_time"],
            state=data["state"],
            items=[OrderItemFormDTO(**item) for item in data["items"]],
        )


class CommentSerializer(serializers.Serializer):
    comment = serializers.CharField(max_length=2000)


class OrderListQuerySerializer(serializers.Serializer):
    """``?filter=&after=`` on the order list."""

    filter = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=None
    )
    after = serializers.DateField(required=False, allow_null=True, default=None)


class DashboardQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=1, max_value=9999, required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "full_name", "phone_number", "details"]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with product snapshot."""

    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "quantity",
            "comment",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class OrderHistoryItemSerializer(serializers.ModelSerializer):
    created_by = serializers.CharField(
        source="created_by.username", read_only=True, default=None
    )

    class Meta:
        model = OrderHistoryItem
        fields = [
            "id",
            "created_by",
            "message",
            "old_state",
            "new_state",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with customer, items and history."""

    customer = CustomerSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    history = OrderHistoryItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "owner_id",
            "state",
            "due_date",
            "due_time",
            "total_price",
            "customer",
            "items",
            "history",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the order list (no nested rows)."""

    customer_full_name = serializers.CharField(
        source="customer.full_name", read_only=True
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "state",
            "due_date",
            "due_time",
            "customer_full_name",
            "total_price",
        ]
        read_only_fields = fields
