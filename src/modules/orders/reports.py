"""Delivery statistics and dashboard assembly.

Turns the grouped rows returned by the order repository into dense,
fixed-length series.  ``None`` marks a bucket with no rows; a bucket whose
rows add up to zero stays ``0``.  Every query is independent; the
dashboard is not a consistent snapshot.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

import structlog
from django.utils import timezone

from modules.orders.constants import NOT_AVAILABLE_STATES, SALES_YEARS, OrderState
from modules.orders.dtos import DashboardData, DeliveryStats

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

MONTHS_PER_YEAR = 12


def flatten_and_replace_missing_with_none(
    length: int, rows: Iterable[Tuple[int, int]]
) -> List[Optional[int]]:
    """Spread 1-based ``(ordinal, value)`` rows over a list of *length*."""
    series: List[Optional[int]] = [None] * length
    for ordinal, value in rows:
        series[ordinal - 1] = value
    return series


def build_sales_matrix(
    rows: Iterable[Tuple[int, int, Decimal]], month: int, year: int
) -> List[List[Optional[Decimal]]]:
    """Place ``(year, month, total)`` rows into a year-by-month grid.

    Row 0 is *year*, row 1 the year before it and so on.  The cell for the
    requested (*year*, *month*) is left empty.
    """
    matrix: List[List[Optional[Decimal]]] = [
        [None] * MONTHS_PER_YEAR for _ in range(SALES_YEARS)
    ]
    for row_year, row_month, total in rows:
        if row_year == year and row_month == month:
            continue
        matrix[year - row_year][row_month - 1] = total
    return matrix


def build_product_deliveries(rows: Iterable[Tuple[str, int]]) -> Dict[str, int]:
    """Product name -> quantity, keeping the row order."""
    return {name: quantity for name, quantity in rows}


class OrderReportService:
    """Computes delivery stats and the dashboard payload."""

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def compute_delivery_stats(self, today: date) -> DeliveryStats:
        tomorrow = today + timedelta(days=1)
        repo = self._order_repo
        return DeliveryStats(
            delivered_today=repo.count_by_due_date_and_state_in(
                today, {OrderState.DELIVERED}
            ),
            due_today=repo.count_by_due_date(today),
            due_tomorrow=repo.count_by_due_date(tomorrow),
            not_available_today=repo.count_by_due_date_and_state_in(
                today, NOT_AVAILABLE_STATES
            ),
            new_orders=repo.count_by_state(OrderState.NEW),
        )

    def build_dashboard_data(self, month: int, year: int) -> DashboardData:
        repo = self._order_repo
        delivered = OrderState.DELIVERED
        days_in_month = calendar.monthrange(year, month)[1]

        data = DashboardData(
            delivery_stats=self.compute_delivery_stats(timezone.localdate()),
            deliveries_this_month=flatten_and_replace_missing_with_none(
                days_in_month, repo.count_per_day(delivered, year, month)
            ),
            deliveries_this_year=flatten_and_replace_missing_with_none(
                MONTHS_PER_YEAR, repo.count_per_month(delivered, year)
            ),
            sales_per_month=build_sales_matrix(
                repo.sum_per_month_last_three_years(delivered, year), month, year
            ),
            product_deliveries=build_product_deliveries(
                repo.sum_per_product(delivered, year, month)
            ),
        )
        logger.info(
            "dashboard.built",
            month=month,
            year=year,
            products=len(data.product_deliveries),
        )
        return data
