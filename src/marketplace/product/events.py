"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductListed:
    """An approved seller put a new product up for sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    category_id = Identifier()
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    listed_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductPriceChanged:
    """The unit price changed. Existing orders keep the price they were placed at."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductRemoved:
    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    removed_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class StockReserved:
    """Stock was taken for an order being placed."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    reserved_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class StockReleased:
    """Stock came back from a cancelled order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    released_at = DateTime(required=True)
