"""Domain events for the Order aggregate.

Events are versioned, immutable facts. Every status change raises one, so
the event store holds the full lifecycle of each order.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer placed a cash-on-delivery order and its stock was reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)
    total_price = Float(required=True)
    address = Text(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderStatusAdvanced:
    """The seller moved the order forward (Packed, Shipped or Delivered)."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled before shipping and its quantity went back to stock."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_status = String(required=True)
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)
