from __future__ import annotations

import pytest

from modules.orders.constants import NOT_AVAILABLE_STATES, OrderState, display_name

pytestmark = pytest.mark.unit


class TestDisplayName:
    @pytest.mark.parametrize(
        "state, expected",
        [
            (OrderState.NEW, "New"),
            (OrderState.CONFIRMED, "Confirmed"),
            (OrderState.READY, "Ready"),
            (OrderState.DELIVERED, "Delivered"),
            (OrderState.PROBLEM, "Problem"),
            (OrderState.CANCELLED, "Cancelled"),
        ],
    )
    def test_display_name(self, state, expected):
        assert display_name(state) == expected

    def test_accepts_raw_value(self):
        assert display_name("READY") == "Ready"

    def test_unknown_state_raises(self):
        with pytest.raises(ValueError):
            display_name("BURNT")


class TestNotAvailableStates:
    def test_is_complement_of_handed_over_states(self):
        assert NOT_AVAILABLE_STATES == {
            OrderState.NEW,
            OrderState.CONFIRMED,
            OrderState.PROBLEM,
        }

    def test_is_immutable(self):
        assert isinstance(NOT_AVAILABLE_STATES, frozenset)
        with pytest.raises(AttributeError):
            NOT_AVAILABLE_STATES.add(OrderState.READY)
