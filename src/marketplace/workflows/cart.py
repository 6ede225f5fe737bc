"""Cart workflows. Lines are priced at the product's current price when viewed."""

from protean.utils.globals import current_domain

from marketplace.access import requires
from marketplace.account.account import Role
from marketplace.cart.cart import CartEntry
from marketplace.cart.items import AddToCart
from marketplace.errors import NotFound
from marketplace.product.product import Product
from marketplace.utils.logging import get_logger
from marketplace.workflows.boundary import run_atomically, workflow
from marketplace.workflows.orders import coerce_quantity

logger = get_logger(__name__)


@workflow("add_to_cart")
@requires(Role.BUYER)
def add_to_cart(buyer, product_id, quantity=None) -> CartEntry:
    qty = coerce_quantity(quantity)
    if not product_id:
        raise NotFound("Product not found")

    entry_id = run_atomically(AddToCart(buyer_id=buyer.account_id, product_id=product_id, quantity=qty))

    logger.info("cart_entry_added", entry_id=entry_id, buyer_id=buyer.account_id, product_id=product_id)
    return current_domain.repository_for(CartEntry).get(entry_id)


@workflow("view_cart")
@requires(Role.BUYER)
def view_cart(buyer) -> dict:
    """Cart lines with subtotals. Lines for removed products are flagged and left out of the total."""
    entries = current_domain.repository_for(CartEntry).for_buyer(buyer.account_id)
    products = current_domain.repository_for(Product).by_ids(e.product_id for e in entries)

    lines = []
    total = 0.0
    for entry in entries:
        product = products.get(str(entry.product_id))
        available = product is not None and product.is_listed
        subtotal = round(product.price * entry.quantity, 2) if available else None
        if available:
            total += subtotal
        lines.append(
            {
                "id": str(entry.id),
                "product_id": str(entry.product_id),
                "product_name": product.name if product else None,
                "unit_price": product.price if available else None,
                "quantity": entry.quantity,
                "subtotal": subtotal,
                "available": available,
            }
        )

    return {"items": lines, "total": round(total, 2)}
