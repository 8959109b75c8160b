"""Unit tests for OrderService.

Covers:
- create_new: defaults, nothing persisted.
- save_order: new vs existing order, filler invocation, OrderNotFound.
- add_comment / persist_order: delegation to the repository.
- Four-way filtered search and count.
- Upcoming orders projection.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, sentinel

import pytest
from freezegun import freeze_time

from modules.orders.constants import OrderState
from modules.orders.dtos import OrderSummaryDTO
from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda order: order
    return repo


@pytest.fixture()
def service(mock_repo):
    return OrderService(order_repository=mock_repo)


class RecordingFiller:
    def __init__(self) -> None:
        self.calls = []

    def fill(self, current_user, order):
        self.calls.append((current_user, order))
        order.customer.full_name = "Filled In"


# ===========================================================================
# Commands
# ===========================================================================


class TestCreateNew:
    @freeze_time("2024-11-02 08:00:00")
    def test_defaults(self, service, mock_repo, barista):
        order = service.create_new(barista)
        assert order.owner == barista
        assert order.state == OrderState.NEW
        assert order.due_date == date(2024, 11, 2)
        mock_repo.save.assert_not_called()


class TestSaveOrder:
    def test_new_order(self, service, mock_repo, barista):
        filler = RecordingFiller()
        order = service.save_order(barista, None, filler)

        assert order.owner == barista
        assert order.customer.full_name == "Filled In"
        assert filler.calls == [(barista, order)]
        mock_repo.get_by_id.assert_not_called()
        mock_repo.save.assert_called_once_with(order)

    def test_existing_order_keeps_identity(self, service, mock_repo, barista):
        existing = Order.for_user(barista)
        mock_repo.get_by_id.return_value = existing
        filler = RecordingFiller()

        order = service.save_order(barista, existing.id, filler)

        assert order is existing
        mock_repo.get_by_id.assert_called_once_with(str(existing.id))
        mock_repo.save.assert_called_once_with(existing)

    def test_unknown_order_raises(self, service, mock_repo, barista):
        mock_repo.get_by_id.return_value = None
        filler = RecordingFiller()

        with pytest.raises(OrderNotFound):
            service.save_order(barista, "0190b1d2-0000-7000-8000-000000000000", filler)

        assert filler.calls == []
        mock_repo.save.assert_not_called()

    def test_failing_filler_skips_persist(self, service, mock_repo, barista):
        filler = MagicMock()
        filler.fill.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            service.save_order(barista, None, filler)

        mock_repo.save.assert_not_called()

    def test_store_failure_propagates(self, service, mock_repo, barista):
        from django.db import DatabaseError

        mock_repo.save.side_effect = DatabaseError("disk full")
        with pytest.raises(DatabaseError):
            service.save_order(barista, None, RecordingFiller())


class TestAddComment:
    def test_appends_history_without_state(self, service, mock_repo, barista):
        order = Order.for_user(barista)
        order.clear_staged_history()

        service.add_comment(barista, order, "Extra icing please")

        [entry] = order.staged_history
        assert entry.message == "Extra icing please"
        assert entry.author == barista
        assert entry.old_state is None and entry.new_state is None
        assert order.state == OrderState.NEW
        mock_repo.save.assert_called_once_with(order)


class TestPersistOrder:
    def test_delegates(self, service, mock_repo):
        mock_repo.save.side_effect = None
        mock_repo.save.return_value = sentinel.saved
        assert service.persist_order(sentinel.order) is sentinel.saved
        mock_repo.save.assert_called_once_with(sentinel.order)


# ===========================================================================
# Queries
# ===========================================================================


class TestLoad:
    def test_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = sentinel.order
        assert service.load("abc") is sentinel.order

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(OrderNotFound):
            service.load("not-a-uuid")


class TestFilteredSearch:
    AFTER = date(2024, 1, 31)

    def test_name_and_date(self, service, mock_repo):
        page = service.find_any_matching_after_due_date(
            "eva", self.AFTER, sentinel.page_request
        )
        mock_repo.find_by_customer_name_and_due_date_after.assert_called_once_with(
            "eva", self.AFTER, sentinel.page_request
        )
        assert page is mock_repo.find_by_customer_name_and_due_date_after.return_value

    def test_name_only(self, service, mock_repo):
        service.find_any_matching_after_due_date("eva", None, sentinel.page_request)
        mock_repo.find_by_customer_name.assert_called_once_with(
            "eva", sentinel.page_request
        )

    @pytest.mark.parametrize("text_filter", [None, ""])
    def test_date_only(self, service, mock_repo, text_filter):
        service.find_any_matching_after_due_date(
            text_filter, self.AFTER, sentinel.page_request
        )
        mock_repo.find_by_due_date_after.assert_called_once_with(
            self.AFTER, sentinel.page_request
        )
        mock_repo.find_by_customer_name.assert_not_called()

    @pytest.mark.parametrize("text_filter", [None, ""])
    def test_neither(self, service, mock_repo, text_filter):
        service.find_any_matching_after_due_date(
            text_filter, None, sentinel.page_request
        )
        mock_repo.find_all.assert_called_once_with(sentinel.page_request)
        mock_repo.find_by_due_date_after.assert_not_called()


class TestFilteredCount:
    AFTER = date(2024, 1, 31)

    def test_name_and_date(self, service, mock_repo):
        mock_repo.count_by_customer_name_and_due_date_after.return_value = 2
        assert service.count_any_matching_after_due_date("eva", self.AFTER) == 2

    def test_name_only(self, service, mock_repo):
        mock_repo.count_by_customer_name.return_value = 5
        assert service.count_any_matching_after_due_date("eva", None) == 5
        mock_repo.count_by_customer_name.assert_called_once_with("eva")

    def test_date_only(self, service, mock_repo):
        mock_repo.count_by_due_date_after.return_value = 7
        assert service.count_any_matching_after_due_date("", self.AFTER) == 7
        mock_repo.count_by_due_date_after.assert_called_once_with(self.AFTER)

    def test_neither(self, service, mock_repo):
        mock_repo.count.return_value = 42
        assert service.count_any_matching_after_due_date(None, None) == 42


class TestUpcoming:
    @freeze_time("2024-06-01 10:00:00")
    def test_projects_orders_from_today(self, service, mock_repo, barista, croissant):
        order = Order.for_user(barista)
        order.customer.full_name = "Eva Jensen"
        order.customer.save()
        order.total_price = Decimal("5.00")
        order.save()
        mock_repo.find_by_due_date_from.return_value = [order]

        summaries = service.find_any_matching_starting_today()

        mock_repo.find_by_due_date_from.assert_called_once_with(date(2024, 6, 1))
        assert summaries == [
            OrderSummaryDTO(
                id=order.id,
                state=OrderState.NEW,
                customer_full_name="Eva Jensen",
                due_date=date(2024, 6, 1),
                due_time=order.due_time,
                total_price=Decimal("5.00"),
                item_count=0,
            )
        ]
