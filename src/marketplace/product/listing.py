"""Product listing — command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.command(part_of="Product")
class ListProduct:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    category_id = Identifier()
    image_urls = Text()  # JSON: list of image URLs


@marketplace.command_handler(part_of=Product)
class ListProductHandler:
    @handle(ListProduct)
    def list_product(self, command):
        product = Product.list_for_sale(
            seller_id=command.seller_id,
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            category_id=command.category_id,
            image_urls=json.loads(command.image_urls) if command.image_urls else [],
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
