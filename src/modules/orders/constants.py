"""Order domain constants.

Defines the order lifecycle states and the sets the delivery dashboard
derives from them.
"""

from __future__ import annotations

from datetime import time

from django.db import models


class OrderState(models.TextChoices):
    NEW = "NEW"
    CONFIRMED = "CONFIRMED"
    READY = "READY"
    DELIVERED = "DELIVERED"
    PROBLEM = "PROBLEM"
    CANCELLED = "CANCELLED"


def display_name(state: OrderState) -> str:
    """Human readable label: ``NEW`` -> ``New``, ``CANCELLED`` -> ``Cancelled``."""
    name = OrderState(state).name.lower()
    return name[:1].upper() + name[1:]


# Orders due today that cannot be handed over yet
NOT_AVAILABLE_STATES: frozenset[OrderState] = frozenset(OrderState) - {
    OrderState.DELIVERED,
    OrderState.READY,
    OrderState.CANCELLED,
}

DEFAULT_DUE_TIME = time(16, 0)

ORDER_PLACED_MESSAGE = "Order placed"

# Rows of the sales matrix: requested year and the two before it
SALES_YEARS = 3
