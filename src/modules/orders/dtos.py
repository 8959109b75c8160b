"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``OrderItemFormDTO`` / ``OrderFormDTO``: what the order form submits.
- ``OrderSummaryDTO``: lightweight projection for upcoming orders.
- ``DeliveryStats``: the five counters at the top of the dashboard.
- ``DashboardData``: the complete dashboard payload.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import OrderState

if TYPE_CHECKING:
    from modules.orders.models import Order


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderItemFormDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int = Field(ge=1)
    comment: str = ""


class OrderFormDTO(BaseModel):
    """Immutable DTO for the order editor.

    ``state`` is optional: new orders start as NEW and existing orders keep
    their state unless a new one is given.
    """

    model_config = ConfigDict(frozen=True)

    customer_full_name: str = Field(min_length=1, max_length=255)
    customer_phone_number: str = Field(default="", max_length=20)
    customer_details: str = ""
    due_date: date
    due_time: time
    state: Optional[OrderState] = None
    items: List[OrderItemFormDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[OrderItemFormDTO]
    ) -> List[OrderItemFormDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderSummaryDTO(BaseModel):
    """Immutable projection used by the upcoming-orders list."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    state: OrderState
    customer_full_name: str
    due_date: date
    due_time: time
    total_price: Decimal
    item_count: int

    @classmethod
    def from_entity(cls, order: Order) -> OrderSummaryDTO:
        """Assumes ``customer`` is selected and ``items`` prefetched."""
        return cls(
            id=order.id,
            state=order.state,
            customer_full_name=order.customer.full_name,
            due_date=order.due_date,
            due_time=order.due_time,
            total_price=order.total_price,
            item_count=len(order.items.all()),
        )


class DeliveryStats(BaseModel):
    """Delivery counters, recomputed on every request."""

    model_config = ConfigDict(frozen=True)

    delivered_today: int = Field(default=0, ge=0)
    due_today: int = Field(default=0, ge=0)
    due_tomorrow: int = Field(default=0, ge=0)
    not_available_today: int = Field(default=0, ge=0)
    new_orders: int = Field(default=0, ge=0)


class DashboardData(BaseModel):
    """Dashboard payload.

    ``None`` in a series means "no data for this bucket", which is not the
    same as a bucket whose rows add up to zero.

    - ``deliveries_this_month``: one slot per day of the requested month.
    - ``deliveries_this_year``: one slot per month.
    - ``sales_per_month``: row 0 is the requested year, row 1 the year
      before, row 2 two years before; 12 month columns each.
    - ``product_deliveries``: product name -> delivered quantity, in the
      order the store returned the rows.
    """

    model_config = ConfigDict(frozen=True)

    delivery_stats: DeliveryStats
    deliveries_this_month: List[Optional[int]]
    deliveries_this_year: List[Optional[int]]
    sales_per_month: List[List[Optional[Decimal]]]
    product_deliveries: Dict[str, int]
