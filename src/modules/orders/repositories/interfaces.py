"""Order repository interface.

Extends ``IRepository[Order]`` with the filtered/paginated look-ups used
by the order list and the grouped aggregate queries used by the delivery
dashboard.  Aggregate rows are plain tuples:

- per day:      ``(day_of_month, count)``, 1-based day
- per month:    ``(month, count)``, 1-based month
- sales:        ``(year, month, total)``
- per product:  ``(product_name, quantity)``

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Collection, List, Optional, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    ``save`` persists the order, its customer, staged line items and
    staged history entries atomically.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with customer, items and history loaded."""

    # ------------------------------------------------------------------
    # Filtered look-ups
    # ------------------------------------------------------------------

    @abstractmethod
    def find_all(self, page_request: PageRequest) -> Page:
        """One page of every order."""

    @abstractmethod
    def find_by_customer_name(self, name: str, page_request: PageRequest) -> Page:
        """Orders whose customer full name contains *name* (case-insensitive)."""

    @abstractmethod
    def find_by_due_date_after(self, due_date: date, page_request: PageRequest) -> Page:
        """Orders due strictly after *due_date*."""

    @abstractmethod
    def find_by_customer_name_and_due_date_after(
        self, name: str, due_date: date, page_request: PageRequest
    ) -> Page:
        """Both conditions of the two finders above."""

    @abstractmethod
    def count_by_customer_name(self, name: str) -> int: ...

    @abstractmethod
    def count_by_due_date_after(self, due_date: date) -> int: ...

    @abstractmethod
    def count_by_customer_name_and_due_date_after(
        self, name: str, due_date: date
    ) -> int: ...

    @abstractmethod
    def find_by_due_date_from(self, due_date: date) -> List[Order]:
        """Orders due on or after *due_date* with customer and items loaded."""

    # ------------------------------------------------------------------
    # Dashboard counters and aggregates
    # ------------------------------------------------------------------

    @abstractmethod
    def count_by_due_date(self, due_date: date) -> int: ...

    @abstractmethod
    def count_by_due_date_and_state_in(
        self, due_date: date, states: Collection[str]
    ) -> int: ...

    @abstractmethod
    def count_by_state(self, state: str) -> int: ...

    @abstractmethod
    def count_per_day(self, state: str, year: int, month: int) -> List[Tuple[int, int]]:
        """Orders in *state* due in the month, grouped by day of month."""

    @abstractmethod
    def count_per_month(self, state: str, year: int) -> List[Tuple[int, int]]:
        """Orders in *state* due in the year, grouped by month."""

    @abstractmethod
    def sum_per_month_last_three_years(
        self, state: str, year: int
    ) -> List[Tuple[int, int, Decimal]]:
        """Order totals in *state* for ``year - 2 .. year``, by year and month."""

    @abstractmethod
    def sum_per_product(
        self, state: str, year: int, month: int
    ) -> List[Tuple[str, int]]:
        """Ordered quantity per product for orders in *state* due in the month."""
