"""Customer, Order, OrderItem and OrderHistoryItem models.

Business rules implemented:
- A new order is due today at 16:00, in state NEW, owned by its creator,
  and starts its history with "Order placed".
- Every effective state change appends a history entry with old/new state.
- History is append-only; comments are history entries without a state.
- OrderItem snapshots the product price at save time (``unit_price``) and
  keeps ``subtotal = quantity * unit_price``.
- ``Order.total_price`` is the sum of its item subtotals, refreshed by the
  repository whenever the items are replaced.

Line items and history entries set on an order are *staged* in memory and
written by the repository in the same transaction as the order itself,
so a brand-new order can be fully filled in before it has a primary key.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.orders.constants import (
    DEFAULT_DUE_TIME,
    ORDER_PLACED_MESSAGE,
    OrderState,
    display_name,
)

if TYPE_CHECKING:
    from modules.products.models import Product


class Customer(BaseModel):
    """Person who placed the order; owned by exactly one order."""

    full_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20, blank=True, default="")
    details = models.TextField(blank=True, default="")

    class Meta:
        db_table = "customers"
        indexes = [
            models.Index(fields=["full_name"], name="customers_full_name_idx"),
        ]

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class StagedHistoryEntry:
    author: Any
    message: str
    old_state: Optional[str] = None
    new_state: Optional[str] = None


@dataclass(frozen=True)
class StagedItem:
    product: Product
    quantity: int
    comment: str = ""


class StagedChangesMixin:
    """Collects history entries and replacement line items in memory.

    The repository flushes both right after saving the order row.
    """

    _staged_history: list[StagedHistoryEntry]
    _staged_items: Optional[list[StagedItem]]

    def add_history_item(
        self,
        author,
        message: str,
        old_state: Optional[str] = None,
        new_state: Optional[str] = None,
    ) -> None:
        if not hasattr(self, "_staged_history"):
            self._staged_history = []
        self._staged_history.append(
            StagedHistoryEntry(author, message, old_state, new_state)
        )

    @property
    def staged_history(self) -> list[StagedHistoryEntry]:
        return list(getattr(self, "_staged_history", []))

    def clear_staged_history(self) -> None:
        if hasattr(self, "_staged_history"):
            self._staged_history.clear()

    def replace_items(self, items: Iterable[StagedItem]) -> None:
        self._staged_items = list(items)

    @property
    def staged_items(self) -> Optional[list[StagedItem]]:
        """Replacement items, or ``None`` when the items are untouched."""
        return getattr(self, "_staged_items", None)

    def clear_staged_items(self) -> None:
        self._staged_items = None


class Order(StagedChangesMixin, SoftDeleteModel):
    """Order aggregate root.

    Build new orders with ``Order.for_user`` so the defaults and the
    opening history entry are always present.
    """

    owner: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    customer: models.ForeignKey = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    due_date: models.DateField = models.DateField()
    due_time: models.TimeField = models.TimeField(default=DEFAULT_DUE_TIME)
    state: models.CharField = models.CharField(
        max_length=20,
        choices=OrderState.choices,
        default=OrderState.NEW,
    )
    total_price: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        db_table = "orders"
        ordering = ["due_date", "due_time", "id"]
        indexes = [
            models.Index(fields=["due_date", "state"], name="orders_due_state_idx"),
            models.Index(fields=["state"], name="orders_state_idx"),
        ]

    @classmethod
    def for_user(cls, user) -> Order:
        """Unsaved order owned by *user*, due today at 16:00, state NEW."""
        order = cls(
            owner=user,
            customer=Customer(),
            due_date=timezone.localdate(),
            due_time=DEFAULT_DUE_TIME,
            state=OrderState.NEW,
        )
        order.add_history_item(user, ORDER_PLACED_MESSAGE, new_state=OrderState.NEW)
        return order

    def change_state(self, user, state: str) -> None:
        """Move to *state*, recording the transition when it is a change."""
        state = OrderState(state)
        if state == self.state:
            return
        old_state = self.state
        self.state = state
        self.add_history_item(
            user,
            f"Order {display_name(state)}",
            old_state=old_state,
            new_state=state,
        )

    def __str__(self) -> str:
        return f"Order {self.id} ({self.state})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    ``unit_price`` is a snapshot of the product price taken when the item
    is first saved.
    """

    order: models.ForeignKey = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    comment: models.TextField = models.TextField(blank=True, default="")
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price is None:
            unit_price = getattr(self.product, "price", None)
            if unit_price is None:
                raise ValidationError({"unit_price": "Product price is required."})
            self.unit_price = unit_price
        self.subtotal = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product} x{self.quantity}"


class OrderHistoryItem(BaseModel):
    """Append-only audit trail entry.

    ``created_by`` is nullable so history survives the removal of a user.
    ``old_state``/``new_state`` are empty for plain comments.
    """

    order: models.ForeignKey = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="history",
    )
    created_by: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    message: models.TextField = models.TextField(blank=True, default="")
    old_state: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderState.choices,
        null=True,
        blank=True,
    )
    new_state: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderState.choices,
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "order_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["order", "created_at"], name="order_history_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id}: {self.message}"
