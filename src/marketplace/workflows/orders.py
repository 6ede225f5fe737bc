"""Order workflows — placement, status updates, cancellation and order views."""

import math

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.access import requires
from marketplace.account.account import Account, Role
from marketplace.errors import InvalidInput, NotFound
from marketplace.order.cancellation import CancelOrder
from marketplace.order.fulfillment import UpdateOrderStatus
from marketplace.order.order import CASH_ON_DELIVERY, Order, OrderStatus
from marketplace.order.placement import PlaceOrder
from marketplace.product.product import Product
from marketplace.utils.locks import order_key, product_key
from marketplace.utils.logging import get_logger
from marketplace.workflows.boundary import run_atomically, workflow

logger = get_logger(__name__)


def coerce_quantity(raw) -> int:
    """Quantity defaults to 1 when missing or non-numeric; numbers must be whole and positive."""
    if raw is None or isinstance(raw, bool):
        return 1
    if isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return 1
    elif isinstance(raw, int | float):
        try:
            value = float(raw)
        except OverflowError:
            raise InvalidInput("Quantity is out of range") from None
    else:
        return 1

    if value != value:  # NaN
        return 1
    if math.isinf(value):
        raise InvalidInput("Quantity is out of range")
    if not value.is_integer():
        raise InvalidInput(f"Quantity must be a whole number, got {raw!r}")
    if value < 1:
        raise InvalidInput("Quantity must be at least 1")
    return int(value)


def _load_order(order_id) -> Order:
    if not order_id:
        raise NotFound("Order not found")
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound(f"Order {order_id} not found") from None


def describe_orders(orders) -> list[dict]:
    """Order records joined with product and party names for display."""
    products = current_domain.repository_for(Product).by_ids(o.product_id for o in orders)
    accounts = current_domain.repository_for(Account).by_ids(
        [o.buyer_id for o in orders] + [o.seller_id for o in orders]
    )

    views = []
    for order in orders:
        product = products.get(str(order.product_id))
        buyer = accounts.get(str(order.buyer_id))
        seller = accounts.get(str(order.seller_id))
        cover = min(product.images, key=lambda i: i.display_order or 0) if product and product.images else None
        view = order.to_dict()
        view.update(
            product_name=product.name if product else None,
            image_url=cover.url if cover else None,
            buyer_name=buyer.username if buyer else None,
            seller_name=seller.username if seller else None,
        )
        views.append(view)
    return views


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------
@workflow("place_order")
@requires(Role.BUYER)
def place_order(buyer, product_id, quantity=None, address=None, payment_method=None) -> Order:
    qty = coerce_quantity(quantity)
    if not product_id:
        raise NotFound("Product not found")
    if not address or not str(address).strip():
        raise InvalidInput("Address is required")
    if payment_method != CASH_ON_DELIVERY:
        raise InvalidInput(f"Only {CASH_ON_DELIVERY} is available")

    command = PlaceOrder(
        buyer_id=buyer.account_id,
        product_id=product_id,
        quantity=qty,
        address=str(address).strip(),
        payment_method=payment_method,
    )
    order_id = run_atomically(command, product_key(product_id))

    logger.info("order_placed", order_id=order_id, buyer_id=buyer.account_id, product_id=product_id, quantity=qty)
    return _load_order(order_id)


# ---------------------------------------------------------------------------
# Seller side
# ---------------------------------------------------------------------------
@workflow("seller_update_status")
@requires(Role.SELLER, approved_seller=True)
def seller_update_status(seller, order_id, new_status) -> Order:
    target = OrderStatus.parse(new_status)
    order = _load_order(order_id)

    keys = [order_key(order.id)]
    if target == OrderStatus.CANCELLED:
        keys.append(product_key(order.product_id))

    command = UpdateOrderStatus(order_id=order.id, seller_id=seller.account_id, new_status=target.value)
    run_atomically(command, *keys)

    logger.info("order_status_updated", order_id=str(order.id), seller_id=seller.account_id, status=target.value)
    return _load_order(order.id)


@workflow("seller_cancel")
@requires(Role.SELLER, approved_seller=True)
def seller_cancel(seller, order_id) -> Order:
    return _cancel(seller, order_id)


@workflow("seller_orders")
@requires(Role.SELLER, approved_seller=True)
def seller_orders(seller, limit=100, offset=0) -> list[dict]:
    return describe_orders(current_domain.repository_for(Order).sold_by(seller.account_id, limit=limit, offset=offset))


# ---------------------------------------------------------------------------
# Buyer side
# ---------------------------------------------------------------------------
@workflow("buyer_cancel")
@requires(Role.BUYER)
def buyer_cancel(buyer, order_id) -> Order:
    return _cancel(buyer, order_id)


@workflow("buyer_orders")
@requires(Role.BUYER)
def buyer_orders(buyer, limit=100, offset=0) -> list[dict]:
    return describe_orders(current_domain.repository_for(Order).placed_by(buyer.account_id, limit=limit, offset=offset))


def _cancel(actor, order_id) -> Order:
    order = _load_order(order_id)
    command = CancelOrder(order_id=order.id, actor_id=actor.account_id, actor_role=actor.role.value)
    run_atomically(command, order_key(order.id), product_key(order.product_id))

    logger.info("order_cancelled", order_id=str(order.id), actor_id=actor.account_id, role=actor.role.value)
    return _load_order(order.id)


# ---------------------------------------------------------------------------
# Authorizer
# ---------------------------------------------------------------------------
@workflow("all_orders")
@requires(Role.AUTHORIZER)
def all_orders(authorizer, limit=100, offset=0) -> list[dict]:
    return describe_orders(current_domain.repository_for(Order).recent(limit=limit, offset=offset))
