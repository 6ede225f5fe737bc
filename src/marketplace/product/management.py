"""Seller-side product management — commands and handler.

Sellers can only touch their own listings. Removed products are invisible
here, the same way they are to buyers.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import Forbidden, NotFound
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class ChangeProductPrice:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)


@marketplace.command(part_of="Product")
class RemoveProduct:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _owned_listing(repo, product_id, seller_id) -> Product:
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        raise NotFound(f"Product {product_id} not found") from None

    if not product.is_listed:
        raise NotFound(f"Product {product_id} not found")
    if str(product.seller_id) != str(seller_id):
        raise Forbidden("Product belongs to another seller")
    return product


@marketplace.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(ChangeProductPrice)
    def change_price(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_listing(repo, command.product_id, command.seller_id)
        product.change_price(command.price)
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_listing(repo, command.product_id, command.seller_id)
        product.remove()
        repo.add(product)
