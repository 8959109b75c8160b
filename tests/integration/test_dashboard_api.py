"""Integration tests for the delivery dashboard endpoint."""

from __future__ import annotations

from datetime import date

import pytest
from freezegun import freeze_time

from modules.orders.constants import OrderState
from modules.orders.models import Order, StagedItem
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.integration

DASHBOARD_URL = "/api/v1/dashboard/"


@pytest.fixture()
def place_order(barista, croissant):
    repo = OrderDjangoRepository()

    def _place(due: date, state: OrderState, quantity: int = 1) -> Order:
        order = Order.for_user(barista)
        order.customer.full_name = "Eva Jensen"
        order.due_date = due
        order.replace_items([StagedItem(croissant, quantity)])
        order.change_state(barista, state)
        return repo.save(order)

    return _place


class TestDashboard:
    @freeze_time("2024-06-15 12:00:00")
    def test_empty_store(self, auth_client):
        response = auth_client.get(DASHBOARD_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["delivery_stats"] == {
            "delivered_today": 0,
            "due_today": 0,
            "due_tomorrow": 0,
            "not_available_today": 0,
            "new_orders": 0,
        }
        assert body["deliveries_this_month"] == [None] * 30
        assert body["deliveries_this_year"] == [None] * 12
        assert body["sales_per_month"] == [[None] * 12] * 3
        assert body["product_deliveries"] == {}

    @freeze_time("2024-06-15 12:00:00")
    def test_aggregates(self, auth_client, place_order):
        place_order(date(2024, 6, 15), OrderState.DELIVERED, quantity=4)
        place_order(date(2024, 6, 15), OrderState.CONFIRMED)
        place_order(date(2024, 6, 16), OrderState.NEW)
        place_order(date(2024, 5, 2), OrderState.DELIVERED, quantity=2)
        place_order(date(2023, 6, 1), OrderState.DELIVERED)

        body = auth_client.get(DASHBOARD_URL, {"month": 6, "year": 2024}).json()

        assert body["delivery_stats"] == {
            "delivered_today": 1,
            "due_today": 2,
            "due_tomorrow": 1,
            "not_available_today": 1,
            "new_orders": 1,
        }
        assert body["deliveries_this_month"][14] == 1
        assert body["deliveries_this_month"].count(None) == 29
        assert body["deliveries_this_year"][4] == 1
        assert body["deliveries_this_year"][5] == 1
        # current month is left out of the sales grid
        assert body["sales_per_month"][0][5] is None
        assert body["sales_per_month"][0][4] == "5.00"
        assert body["sales_per_month"][1][5] == "2.50"
        assert body["product_deliveries"] == {"Croissant": 4}

    def test_explicit_period(self, auth_client, place_order):
        place_order(date(2023, 2, 28), OrderState.DELIVERED)

        body = auth_client.get(DASHBOARD_URL, {"month": 2, "year": 2023}).json()

        assert len(body["deliveries_this_month"]) == 28
        assert body["deliveries_this_month"][27] == 1

    @pytest.mark.parametrize("query", [{"month": 13}, {"month": 0}, {"year": "x"}])
    def test_invalid_period_returns_400(self, auth_client, query):
        assert auth_client.get(DASHBOARD_URL, query).status_code == 400
