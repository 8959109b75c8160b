"""Order service layer (Use Cases).

Orchestrates the order lifecycle: creating, loading, filling, commenting
and persisting orders, plus the filtered order list.  All write operations
are atomic; the service defines the unit-of-work boundary.

Business rules enforced:
- A new order is due today at 16:00, state NEW, owned by its creator.
- Mutations go through an ``OrderFiller`` and are persisted in the same
  transaction; a failing filler leaves nothing behind.
- Comments are history entries without a state change.
- The list filter is a customer-name substring and/or a due date
  (strictly after); an empty filter string counts as no filter.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.utils import timezone

from modules.core.services import has_text
from modules.orders.dtos import OrderSummaryDTO
from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order

if TYPE_CHECKING:
    from django.core.paginator import Page

    from modules.core.pagination import PageRequest
    from modules.orders.fillers import OrderFiller
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives its repository via constructor injection (DIP).
    """

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_new(self, current_user) -> Order:
        """Unsaved order for *current_user*; nothing is persisted."""
        return Order.for_user(current_user)

    @transaction.atomic
    def save_order(
        self, current_user, order_id: Optional[UUID | str], filler: OrderFiller
    ) -> Order:
        """Create (``order_id is None``) or update an order through *filler*.

        Raises:
            OrderNotFound: *order_id* does not exist.
        """
        if order_id is None:
            order = self.create_new(current_user)
        else:
            order = self.load(order_id)

        log = logger.bind(
            order_id=str(order.id),
            actor_id=str(getattr(current_user, "pk", "")),
            is_new=order_id is None,
        )
        filler.fill(current_user, order)
        order = self._order_repo.save(order)
        log.info("order.save_completed", state=order.state)
        return order

    @transaction.atomic
    def persist_order(self, order: Order) -> Order:
        return self._order_repo.save(order)

    @transaction.atomic
    def add_comment(self, current_user, order: Order, comment: str) -> Order:
        """Append *comment* to the order history and persist."""
        order.add_history_item(current_user, comment)
        order = self._order_repo.save(order)
        logger.info(
            "order.comment_added",
            order_id=str(order.id),
            actor_id=str(getattr(current_user, "pk", "")),
        )
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def load(self, order_id: UUID | str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: unknown or malformed id.
        """
        order = self._order_repo.get_by_id(str(order_id))
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def find_any_matching_after_due_date(
        self,
        text_filter: Optional[str],
        filter_date: Optional[date],
        page_request: PageRequest,
    ) -> Page:
        if has_text(text_filter):
            if filter_date is not None:
                return self._order_repo.find_by_customer_name_and_due_date_after(
                    text_filter, filter_date, page_request
                )
            return self._order_repo.find_by_customer_name(text_filter, page_request)
        if filter_date is not None:
            return self._order_repo.find_by_due_date_after(filter_date, page_request)
        return self._order_repo.find_all(page_request)

    def count_any_matching_after_due_date(
        self, text_filter: Optional[str], filter_date: Optional[date]
    ) -> int:
        if has_text(text_filter):
            if filter_date is not None:
                return self._order_repo.count_by_customer_name_and_due_date_after(
                    text_filter, filter_date
                )
            return self._order_repo.count_by_customer_name(text_filter)
        if filter_date is not None:
            return self._order_repo.count_by_due_date_after(filter_date)
        return self._order_repo.count()

    def find_any_matching_starting_today(self) -> List[OrderSummaryDTO]:
        """Orders due today or later, as lightweight summaries."""
        orders = self._order_repo.find_by_due_date_from(timezone.localdate())
        return [OrderSummaryDTO.from_entity(order) for order in orders]
