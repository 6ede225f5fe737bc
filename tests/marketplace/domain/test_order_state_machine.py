"""Tests for the Order lifecycle table — allowed edges, role checks and terminal states."""

import pytest
from marketplace.account.account import Role
from marketplace.errors import Forbidden, InvalidInput, InvalidTransition
from marketplace.order.events import OrderCancelled, OrderPlaced, OrderStatusAdvanced
from marketplace.order.order import CASH_ON_DELIVERY, Order, OrderStatus


def _make_order(quantity=3, unit_price=100.0):
    return Order.place(
        buyer_id="buyer-001",
        product_id="prod-001",
        seller_id="seller-001",
        quantity=quantity,
        unit_price=unit_price,
        address="12 Harbour Road",
        payment_method=CASH_ON_DELIVERY,
    )


def _order_at_state(target_status):
    """Create an order and advance it to the desired state."""
    order = _make_order()
    order._events.clear()

    if target_status == OrderStatus.CANCELLED:
        order.cancel(Role.SELLER)
        order._events.clear()
        return order

    path = [OrderStatus.PROCESSING, OrderStatus.PACKED, OrderStatus.SHIPPED, OrderStatus.DELIVERED]
    for status in path[1 : path.index(target_status) + 1]:
        order.transition(status, Role.SELLER)
    order._events.clear()
    return order


class TestPlacement:
    def test_new_order_is_processing(self):
        order = _make_order()
        assert order.status == OrderStatus.PROCESSING.value
        assert order.payment_method == CASH_ON_DELIVERY
        assert order.cancelled_by is None

    def test_total_price_is_unit_price_times_quantity(self):
        assert _make_order(quantity=3, unit_price=100.0).total_price == 300.0

    def test_total_price_is_rounded_to_cents(self):
        assert _make_order(quantity=3, unit_price=0.1).total_price == 0.3

    def test_placement_raises_order_placed(self):
        order = _make_order()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.unit_price == 100.0
        assert event.total_price == 300.0

    def test_blank_address_is_rejected(self):
        with pytest.raises(InvalidInput):
            Order.place("b", "p", "s", 1, 10.0, "   ", CASH_ON_DELIVERY)

    def test_other_payment_methods_are_rejected(self):
        with pytest.raises(InvalidInput, match="Cash on Delivery"):
            Order.place("b", "p", "s", 1, 10.0, "12 Harbour Road", "Card")

    def test_zero_quantity_is_rejected(self):
        with pytest.raises(InvalidInput):
            Order.place("b", "p", "s", 0, 10.0, "12 Harbour Road", CASH_ON_DELIVERY)


class TestValidTransitions:
    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PROCESSING, OrderStatus.PACKED),
            (OrderStatus.PACKED, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.PACKED, OrderStatus.CANCELLED),
        ],
    )
    def test_seller_can_follow_every_edge(self, start, target):
        order = _order_at_state(start)
        order.transition(target, Role.SELLER)
        assert order.status == target.value

    def test_advance_raises_status_advanced(self):
        order = _order_at_state(OrderStatus.PROCESSING)
        order.transition(OrderStatus.PACKED, Role.SELLER)

        event = order._events[-1]
        assert isinstance(event, OrderStatusAdvanced)
        assert event.previous_status == "Processing"
        assert event.new_status == "Packed"

    def test_buyer_can_cancel(self):
        order = _order_at_state(OrderStatus.PACKED)
        order.cancel(Role.BUYER)

        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancelled_by == Role.BUYER.value
        event = order._events[-1]
        assert isinstance(event, OrderCancelled)
        assert event.quantity == 3
        assert event.previous_status == "Packed"

    def test_status_names_are_case_insensitive(self):
        order = _order_at_state(OrderStatus.PROCESSING)
        order.transition("packed", "seller")
        assert order.status == OrderStatus.PACKED.value


class TestInvalidTransitions:
    def test_shipped_cannot_go_back_to_processing(self):
        order = _order_at_state(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransition, match="Shipped to Processing"):
            order.transition(OrderStatus.PROCESSING, Role.SELLER)
        assert order.status == OrderStatus.SHIPPED.value

    def test_shipped_cannot_be_cancelled(self):
        order = _order_at_state(OrderStatus.SHIPPED)
        with pytest.raises(InvalidTransition):
            order.cancel(Role.SELLER)

    def test_processing_cannot_skip_to_shipped(self):
        order = _order_at_state(OrderStatus.PROCESSING)
        with pytest.raises(InvalidTransition):
            order.transition(OrderStatus.SHIPPED, Role.SELLER)

    @pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_nothing_leaves_a_terminal_state(self, terminal, target):
        order = _order_at_state(terminal)
        assert order.is_terminal
        with pytest.raises(InvalidTransition):
            order.transition(target, Role.SELLER)
        assert order.status == terminal.value
        assert order._events == []

    def test_unknown_status_is_invalid_input(self):
        order = _order_at_state(OrderStatus.PROCESSING)
        with pytest.raises(InvalidInput, match="Invalid status"):
            order.transition("Teleported", Role.SELLER)


class TestRolePermissions:
    @pytest.mark.parametrize("target", [OrderStatus.PACKED, OrderStatus.CANCELLED])
    def test_authorizer_cannot_move_orders(self, target):
        order = _order_at_state(OrderStatus.PROCESSING)
        with pytest.raises(Forbidden):
            order.transition(target, Role.AUTHORIZER)
        assert order.status == OrderStatus.PROCESSING.value

    def test_buyer_cannot_advance(self):
        order = _order_at_state(OrderStatus.PROCESSING)
        with pytest.raises(Forbidden):
            order.transition(OrderStatus.PACKED, Role.BUYER)

    def test_missing_edge_is_reported_before_role(self):
        order = _order_at_state(OrderStatus.DELIVERED)
        with pytest.raises(InvalidTransition):
            order.cancel(Role.AUTHORIZER)


class TestOwnership:
    def test_assert_sold_by_other_seller(self):
        with pytest.raises(Forbidden):
            _make_order().assert_sold_by("seller-002")

    def test_assert_placed_by_other_buyer(self):
        with pytest.raises(Forbidden):
            _make_order().assert_placed_by("buyer-002")

    def test_owners_pass(self):
        order = _make_order()
        order.assert_sold_by("seller-001")
        order.assert_placed_by("buyer-001")
