"""Order aggregate — a single-product, cash-on-delivery order.

The order is immutable once placed except for its status. `total_price` is
frozen at placement from the unit price the stock was reserved at; later
price edits on the product never reach existing orders.

State Machine (5 states):
    Processing → Packed → Shipped → Delivered
    Processing, Packed → Cancelled

Delivered and Cancelled are terminal. Only the seller moves an order
forward; the seller or the buyer may cancel it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.account.account import Role
from marketplace.domain import marketplace
from marketplace.errors import Forbidden, InvalidInput, InvalidTransition

CASH_ON_DELIVERY = "Cash on Delivery"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "Processing"
    PACKED = "Packed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        for status in cls:
            if isinstance(value, str) and status.value.lower() == value.strip().lower():
                return status
        raise InvalidInput(f"Invalid status: {value!r}")


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PROCESSING: {OrderStatus.PACKED, OrderStatus.CANCELLED},
    OrderStatus.PACKED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Roles allowed to request each target status
_PERMITTED_ROLES = {
    OrderStatus.PACKED: {Role.SELLER},
    OrderStatus.SHIPPED: {Role.SELLER},
    OrderStatus.DELIVERED: {Role.SELLER},
    OrderStatus.CANCELLED: {Role.SELLER, Role.BUYER},
}

TERMINAL_STATES = {status for status, targets in _VALID_TRANSITIONS.items() if not targets}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    total_price = Float(required=True, min_value=0.0)
    address = Text(required=True)
    payment_method = String(max_length=50, default=CASH_ON_DELIVERY)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    cancelled_by = String(max_length=20)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, buyer_id, product_id, seller_id, quantity, unit_price, address, payment_method):
        """Create a Processing order for stock that has already been reserved."""
        from marketplace.order.events import OrderPlaced

        if quantity is None or quantity < 1:
            raise InvalidInput("Quantity must be at least 1")
        if not address or not address.strip():
            raise InvalidInput("Address is required")
        if payment_method != CASH_ON_DELIVERY:
            raise InvalidInput(f"Only {CASH_ON_DELIVERY} is available")

        now = datetime.now(UTC)
        total_price = round(unit_price * quantity, 2)
        order = cls(
            buyer_id=buyer_id,
            product_id=product_id,
            seller_id=seller_id,
            quantity=quantity,
            total_price=total_price,
            address=address.strip(),
            payment_method=payment_method,
            status=OrderStatus.PROCESSING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                buyer_id=buyer_id,
                product_id=product_id,
                seller_id=seller_id,
                quantity=quantity,
                unit_price=unit_price,
                total_price=total_price,
                address=order.address,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------
    def assert_sold_by(self, seller_id):
        if str(self.seller_id) != str(seller_id):
            raise Forbidden("Order belongs to another seller's product")

    def assert_placed_by(self, buyer_id):
        if str(self.buyer_id) != str(buyer_id):
            raise Forbidden("Order belongs to another buyer")

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATES

    def transition(self, requested_status, acting_role):
        """Validate and apply one edge of the lifecycle table.

        Raises InvalidTransition if the edge does not exist and Forbidden if
        `acting_role` may not request the target. Inventory is left to the
        caller.
        """
        from marketplace.order.events import OrderCancelled, OrderStatusAdvanced

        current = OrderStatus(self.status)
        target = OrderStatus.parse(requested_status)
        role = Role.parse(acting_role)

        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(f"Cannot transition from {current.value} to {target.value}")
        if role not in _PERMITTED_ROLES[target]:
            raise Forbidden(f"A {role.value} cannot move an order to {target.value}")

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.CANCELLED:
            self.cancelled_by = role.value
            self.raise_(
                OrderCancelled(
                    order_id=self.id,
                    product_id=self.product_id,
                    quantity=self.quantity,
                    previous_status=current.value,
                    cancelled_by=role.value,
                    cancelled_at=now,
                )
            )
        else:
            self.raise_(
                OrderStatusAdvanced(
                    order_id=self.id,
                    previous_status=current.value,
                    new_status=target.value,
                    changed_at=now,
                )
            )
        return self

    def cancel(self, acting_role):
        return self.transition(OrderStatus.CANCELLED, acting_role)
