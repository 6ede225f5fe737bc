"""Cart items — command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.cart.cart import CartEntry
from marketplace.domain import marketplace
from marketplace.errors import NotFound
from marketplace.product.product import Product


@marketplace.command(part_of="CartEntry")
class AddToCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command_handler(part_of=CartEntry)
class AddToCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound(f"Product {command.product_id} not found") from None
        if not product.is_listed:
            raise NotFound(f"Product {command.product_id} not found")

        entry = CartEntry.add(
            buyer_id=command.buyer_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        current_domain.repository_for(CartEntry).add(entry)
        return str(entry.id)
