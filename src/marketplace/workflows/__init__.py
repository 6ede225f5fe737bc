"""Inbound operations of the marketplace.

Each takes the acting account id as its first argument (where the operation
is role-gated) and raises only `marketplace.errors.MarketplaceError`.
"""

from marketplace.workflows.accounts import (
    grant_authorizer,
    pending_registrations,
    register_account,
    review_seller_registration,
)
from marketplace.workflows.cart import add_to_cart, view_cart
from marketplace.workflows.catalogue import add_product, browse_products, change_product_price, remove_product
from marketplace.workflows.orders import (
    all_orders,
    buyer_cancel,
    buyer_orders,
    place_order,
    seller_cancel,
    seller_orders,
    seller_update_status,
)

__all__ = [
    "add_product",
    "add_to_cart",
    "all_orders",
    "browse_products",
    "buyer_cancel",
    "buyer_orders",
    "change_product_price",
    "grant_authorizer",
    "pending_registrations",
    "place_order",
    "register_account",
    "remove_product",
    "review_seller_registration",
    "seller_cancel",
    "seller_orders",
    "seller_update_status",
]
