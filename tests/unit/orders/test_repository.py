"""Unit tests for OrderDjangoRepository against the real ORM.

Covers:
- save: customer, items, total and history written together.
- get_by_id: Null Object for unknown and malformed ids.
- Filtered look-ups and counters.
- Grouped aggregates used by the dashboard.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from modules.core.pagination import PageRequest
from modules.orders.constants import NOT_AVAILABLE_STATES, OrderState
from modules.orders.models import (
    Customer,
    Order,
    OrderHistoryItem,
    OrderItem,
    StagedItem,
)
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.unit

PAGE = PageRequest(page=1, size=50)


@pytest.fixture()
def repo():
    return OrderDjangoRepository()


@pytest.fixture()
def make_order(repo, barista, croissant):
    def _make(
        name="Eva Jensen",
        due=date(2024, 6, 15),
        state=OrderState.NEW,
        items=None,
    ) -> Order:
        order = Order.for_user(barista)
        order.customer.full_name = name
        order.due_date = due
        order.replace_items(items or [StagedItem(croissant, 1)])
        order.change_state(barista, state)
        return repo.save(order)

    return _make


# ===========================================================================
# save / get_by_id
# ===========================================================================


class TestSave:
    def test_persists_whole_aggregate(self, repo, make_order, croissant, bagel):
        order = make_order(
            items=[StagedItem(croissant, 4, "warm"), StagedItem(bagel, 2)],
            state=OrderState.CONFIRMED,
        )

        stored = repo.get_by_id(str(order.id))
        assert stored.customer.full_name == "Eva Jensen"
        assert stored.total_price == Decimal("16.00")
        assert [(i.product.name, i.quantity) for i in stored.items.all()] == [
            ("Croissant", 4),
            ("Bagel", 2),
        ]
        assert [h.message for h in stored.history.all()] == [
            "Order placed",
            "Order Confirmed",
        ]
        history = list(stored.history.all())
        assert (history[1].old_state, history[1].new_state) == ("NEW", "CONFIRMED")

    def test_clears_staging(self, make_order):
        order = make_order()
        assert order.staged_history == []
        assert order.staged_items is None

    def test_resave_does_not_duplicate(self, repo, make_order):
        order = make_order()
        repo.save(order)
        assert Order.objects.count() == 1
        assert Customer.objects.count() == 1
        assert OrderHistoryItem.objects.filter(order=order).count() == 1
        assert OrderItem.objects.filter(order=order).count() == 1

    def test_replacing_items_recomputes_total(self, repo, make_order, bagel):
        order = make_order()
        order = repo.get_by_id(str(order.id))
        order.replace_items([StagedItem(bagel, 3)])
        repo.save(order)

        stored = repo.get_by_id(str(order.id))
        assert [i.product_id for i in stored.items.all()] == [bagel.id]
        assert stored.total_price == Decimal("9.00")

    def test_untouched_items_are_kept(self, repo, make_order):
        order = make_order()
        order = repo.get_by_id(str(order.id))
        order.due_time = time(8, 0)
        repo.save(order)
        assert OrderItem.objects.filter(order=order).count() == 1


class TestGetById:
    def test_unknown_id(self, repo):
        assert repo.get_by_id("0190b1d2-0000-7000-8000-000000000000") is None

    def test_malformed_id(self, repo):
        assert repo.get_by_id("not-a-uuid") is None

    def test_soft_deleted_order_is_hidden(self, repo, make_order):
        order = make_order()
        order.delete()
        assert repo.get_by_id(str(order.id)) is None
        assert repo.count() == 0


# ===========================================================================
# Filtered look-ups
# ===========================================================================


class TestFilteredLookups:
    @pytest.fixture()
    def orders(self, make_order):
        return [
            make_order("Eva Jensen", date(2024, 6, 10)),
            make_order("Evald Moreau", date(2024, 6, 20)),
            make_order("Hugo Silva", date(2024, 6, 21)),
        ]

    def test_find_all(self, repo, orders):
        page = repo.find_all(PAGE)
        assert [o.customer.full_name for o in page.object_list] == [
            "Eva Jensen",
            "Evald Moreau",
            "Hugo Silva",
        ]

    def test_customer_name_is_case_insensitive_substring(self, repo, orders):
        page = repo.find_by_customer_name("EVA", PAGE)
        assert {o.customer.full_name for o in page.object_list} == {
            "Eva Jensen",
            "Evald Moreau",
        }
        assert repo.count_by_customer_name("eva") == 2

    def test_due_date_after_is_strict(self, repo, orders):
        page = repo.find_by_due_date_after(date(2024, 6, 20), PAGE)
        assert [o.customer.full_name for o in page.object_list] == ["Hugo Silva"]
        assert repo.count_by_due_date_after(date(2024, 6, 20)) == 1

    def test_name_and_due_date(self, repo, orders):
        page = repo.find_by_customer_name_and_due_date_after(
            "eva", date(2024, 6, 10), PAGE
        )
        assert [o.customer.full_name for o in page.object_list] == ["Evald Moreau"]
        assert (
            repo.count_by_customer_name_and_due_date_after("eva", date(2024, 6, 10))
            == 1
        )

    def test_find_by_due_date_from_is_inclusive(self, repo, orders):
        found = repo.find_by_due_date_from(date(2024, 6, 20))
        assert [o.customer.full_name for o in found] == ["Evald Moreau", "Hugo Silva"]


# ===========================================================================
# Dashboard counters and aggregates
# ===========================================================================


class TestCounters:
    def test_due_date_and_state_counters(self, repo, make_order):
        today = date(2024, 6, 15)
        make_order(due=today, state=OrderState.NEW)
        make_order(due=today, state=OrderState.PROBLEM)
        make_order(due=today, state=OrderState.READY)
        make_order(due=today, state=OrderState.DELIVERED)
        make_order(due=date(2024, 6, 16), state=OrderState.NEW)

        assert repo.count_by_due_date(today) == 4
        assert repo.count_by_due_date_and_state_in(today, NOT_AVAILABLE_STATES) == 2
        assert (
            repo.count_by_due_date_and_state_in(today, {OrderState.DELIVERED}) == 1
        )
        assert repo.count_by_state(OrderState.NEW) == 2

    def test_empty_store(self, repo):
        assert repo.count_by_due_date(date(2024, 1, 1)) == 0
        assert repo.count_by_state(OrderState.NEW) == 0


class TestAggregates:
    @pytest.fixture()
    def delivered(self, make_order, croissant, bagel):
        delivered = OrderState.DELIVERED
        make_order(
            due=date(2024, 6, 3),
            state=delivered,
            items=[StagedItem(croissant, 5), StagedItem(bagel, 1)],
        )
        make_order(due=date(2024, 6, 3), state=delivered)
        make_order(due=date(2024, 6, 28), state=delivered, items=[StagedItem(bagel, 7)])
        make_order(due=date(2024, 2, 1), state=delivered)
        make_order(due=date(2023, 11, 5), state=delivered)
        make_order(due=date(2021, 6, 5), state=delivered)
        make_order(due=date(2024, 6, 3), state=OrderState.CANCELLED)

    def test_count_per_day(self, repo, delivered):
        rows = repo.count_per_day(OrderState.DELIVERED, 2024, 6)
        assert rows == [(3, 2), (28, 1)]

    def test_count_per_month(self, repo, delivered):
        rows = repo.count_per_month(OrderState.DELIVERED, 2024)
        assert rows == [(2, 1), (6, 3)]

    def test_sum_per_month_last_three_years(self, repo, delivered):
        rows = repo.sum_per_month_last_three_years(OrderState.DELIVERED, 2024)
        assert rows == [
            (2023, 11, Decimal("2.50")),
            (2024, 2, Decimal("2.50")),
            (2024, 6, Decimal("39.00")),
        ]

    def test_sales_totals_keep_two_decimal_places(self, repo, delivered):
        rows = repo.sum_per_month_last_three_years(OrderState.DELIVERED, 2024)
        assert [str(total) for _, _, total in rows] == ["2.50", "2.50", "39.00"]

    def test_sum_per_product(self, repo, delivered):
        rows = repo.sum_per_product(OrderState.DELIVERED, 2024, 6)
        assert rows == [("Bagel", 8), ("Croissant", 6)]

    def test_soft_deleted_orders_are_ignored(self, repo, delivered):
        for order in Order.objects.filter(due_date=date(2024, 6, 28)):
            order.delete()
        assert repo.count_per_day(OrderState.DELIVERED, 2024, 6) == [(3, 2)]
        assert repo.sum_per_product(OrderState.DELIVERED, 2024, 6) == [
            ("Croissant", 6),
            ("Bagel", 1),
        ]
