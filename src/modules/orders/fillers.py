"""Order fillers.

An ``OrderFiller`` mutates an order inside the service's write
transaction.  ``OrderFormFiller`` applies what the order form submitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import structlog

from modules.orders.models import StagedItem
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.orders.dtos import OrderFormDTO
    from modules.orders.models import Order
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderFiller(Protocol):
    def fill(self, current_user, order: Order) -> None: ...


class OrderFormFiller:
    """Copies an ``OrderFormDTO`` onto an order.

    Raises:
        ProductNotFound: an item references an unknown product.
    """

    def __init__(
        self, dto: OrderFormDTO, product_repository: IProductRepository
    ) -> None:
        self._dto = dto
        self._product_repo = product_repository

    def fill(self, current_user, order: Order) -> None:
        dto = self._dto

        items = []
        for item in dto.items:
            product = self._product_repo.get_by_id(str(item.product_id))
            if product is None:
                raise ProductNotFound(f"Product {item.product_id} not found.")
            items.append(StagedItem(product, item.quantity, item.comment))

        customer = order.customer
        customer.full_name = dto.customer_full_name
        customer.phone_number = dto.customer_phone_number
        customer.details = dto.customer_details

        order.due_date = dto.due_date
        order.due_time = dto.due_time
        order.replace_items(items)

        if dto.state is not None:
            order.change_state(current_user, dto.state)

        logger.debug("order.filled", order_id=str(order.id), item_count=len(items))
