"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
``save`` is wrapped in ``transaction.atomic()`` so the Order aggregate
(customer, order row, line items, history) is persisted all-or-nothing.

Aggregates use ``values().annotate()`` grouping with ``Extract*``
functions on ``due_date``; every grouped query has an explicit
``order_by`` so callers see a stable row order.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Collection, List, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, DecimalField, QuerySet, Sum
from django.db.models.functions import ExtractDay, ExtractMonth, ExtractYear

from modules.core.pagination import paginate
from modules.orders.constants import SALES_YEARS
from modules.orders.models import Order, OrderHistoryItem, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest

logger = structlog.get_logger(__name__)

# SQLite hands back aggregated decimals without their declared scale
CENTS = Decimal("0.01")


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @staticmethod
    def _orders() -> QuerySet:
        return Order.objects.alive()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                self._orders()
                .select_related("customer", "owner")
                .prefetch_related("items__product", "history__created_by")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def count(self) -> int:
        return self._orders().count()

    # ------------------------------------------------------------------
    # Save (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist the order with its customer, staged items and history."""
        entity.customer.save()
        entity.save()

        staged_items = entity.staged_items
        if staged_items is not None:
            OrderItem.objects.filter(order=entity).delete()
            items = [
                OrderItem(
                    order=entity,
                    product=staged.product,
                    quantity=staged.quantity,
                    comment=staged.comment,
                )
                for staged in staged_items
            ]
            for item in items:
                item.save()
            entity.total_price = sum(
                (item.subtotal for item in items), Decimal("0.00")
            )
            entity.save(update_fields=["total_price"])
            entity.clear_staged_items()

        staged_history = entity.staged_history
        for staged in staged_history:
            OrderHistoryItem.objects.create(
                order=entity,
                created_by=staged.author,
                message=staged.message,
                old_state=staged.old_state,
                new_state=staged.new_state,
            )
        entity.clear_staged_history()

        logger.info(
            "order.saved",
            order_id=str(entity.id),
            state=entity.state,
            items_replaced=staged_items is not None,
            history_added=len(staged_history),
        )
        return entity

    # ------------------------------------------------------------------
    # Filtered look-ups
    # ------------------------------------------------------------------

    def _list(self) -> QuerySet:
        return self._orders().select_related("customer")

    def find_all(self, page_request: PageRequest) -> Page:
        return paginate(self._list(), page_request)

    def find_by_customer_name(self, name: str, page_request: PageRequest) -> Page:
        return paginate(
            self._list().filter(customer__full_name__icontains=name), page_request
        )

    def find_by_due_date_after(self, due_date: date, page_request: PageRequest) -> Page:
        return paginate(self._list().filter(due_date__gt=due_date), page_request)

    def find_by_customer_name_and_due_date_after(
        self, name: str, due_date: date, page_request: PageRequest
    ) -> Page:
        return paginate(
            self._list().filter(
                customer__full_name__icontains=name, due_date__gt=due_date
            ),
            page_request,
        )

    def count_by_customer_name(self, name: str) -> int:
        return self._orders().filter(customer__full_name__icontains=name).count()

    def count_by_due_date_after(self, due_date: date) -> int:
        return self._orders().filter(due_date__gt=due_date).count()

    def count_by_customer_name_and_due_date_after(
        self, name: str, due_date: date
    ) -> int:
        return (
            self._orders()
            .filter(customer__full_name__icontains=name, due_date__gt=due_date)
            .count()
        )

    def find_by_due_date_from(self, due_date: date) -> List[Order]:
        return list(
            self._orders()
            .select_related("customer")
            .prefetch_related("items")
            .filter(due_date__gte=due_date)
        )

    # ------------------------------------------------------------------
    # Dashboard counters and aggregates
    # ------------------------------------------------------------------

    def count_by_due_date(self, due_date: date) -> int:
        return self._orders().filter(due_date=due_date).count()

    def count_by_due_date_and_state_in(
        self, due_date: date, states: Collection[str]
    ) -> int:
        return self._orders().filter(due_date=due_date, state__in=list(states)).count()

    def count_by_state(self, state: str) -> int:
        return self._orders().filter(state=state).count()

    def count_per_day(self, state: str, year: int, month: int) -> List[Tuple[int, int]]:
        rows = (
            self._orders()
            .filter(state=state, due_date__year=year, due_date__month=month)
            .annotate(day=ExtractDay("due_date"))
            .values("day")
            .annotate(count=Count("id"))
            .order_by("day")
            .values_list("day", "count")
        )
        return list(rows)

    def count_per_month(self, state: str, year: int) -> List[Tuple[int, int]]:
        rows = (
            self._orders()
            .filter(state=state, due_date__year=year)
            .annotate(month=ExtractMonth("due_date"))
            .values("month")
            .annotate(count=Count("id"))
            .order_by("month")
            .values_list("month", "count")
        )
        return list(rows)

    def sum_per_month_last_three_years(
        self, state: str, year: int
    ) -> List[Tuple[int, int, Decimal]]:
        rows = (
            self._orders()
            .filter(
                state=state,
                due_date__year__gte=year - (SALES_YEARS - 1),
                due_date__year__lte=year,
            )
            .annotate(year=ExtractYear("due_date"), month=ExtractMonth("due_date"))
            .values("year", "month")
            .annotate(
                total=Sum(
                    "total_price",
                    output_field=DecimalField(max_digits=12, decimal_places=2),
                )
            )
            .order_by("year", "month")
            .values_list("year", "month", "total")
        )
        return [(y, m, total.quantize(CENTS)) for y, m, total in rows]

    def sum_per_product(
        self, state: str, year: int, month: int
    ) -> List[Tuple[str, int]]:
        rows = (
            OrderItem.objects.filter(
                order__deleted_at__isnull=True,
                order__state=state,
                order__due_date__year=year,
                order__due_date__month=month,
            )
            .values("product__name")
            .annotate(quantity=Sum("quantity"))
            .order_by("-quantity", "product__name")
            .values_list("product__name", "quantity")
        )
        return list(rows)
