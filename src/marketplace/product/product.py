"""Product aggregate root with its Image entity.

Stock is a plain non-negative counter. It only moves through `reserve` and
`release`, which the inventory ledger calls from inside an order workflow's
unit of work while the product row is locked.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from marketplace.domain import marketplace
from marketplace.errors import InsufficientStock, InvalidInput, InvalidTransition


class ProductStatus(Enum):
    LISTED = "Listed"
    REMOVED = "Removed"


@marketplace.entity(part_of="Product")
class Image:
    url = String(required=True, max_length=500)
    display_order = Integer(default=0)


@marketplace.aggregate
class Product:
    seller_id = Identifier(required=True)
    category_id = Identifier()
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    images = HasMany(Image)
    status = String(choices=ProductStatus, default=ProductStatus.LISTED.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def list_for_sale(cls, seller_id, name, price, stock=0, category_id=None, image_urls=None):
        from marketplace.product.events import ProductListed

        if not name or not name.strip():
            raise InvalidInput("Product name is required")
        if price is None or price < 0:
            raise InvalidInput("Price must be a non-negative amount")
        if stock is None or stock < 0:
            raise InvalidInput("Stock must be a non-negative integer")

        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            category_id=category_id,
            name=name.strip(),
            price=price,
            stock=stock,
            images=[Image(url=url, display_order=index) for index, url in enumerate(image_urls or [])],
            status=ProductStatus.LISTED.value,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=product.id,
                seller_id=seller_id,
                category_id=category_id,
                name=product.name,
                price=price,
                stock=stock,
                listed_at=now,
            )
        )
        return product

    @property
    def is_listed(self):
        return self.status == ProductStatus.LISTED.value

    def change_price(self, new_price):
        from marketplace.product.events import ProductPriceChanged

        if new_price is None or new_price < 0:
            raise InvalidInput("Price must be a non-negative amount")

        previous_price = self.price
        now = datetime.now(UTC)
        self.price = new_price
        self.updated_at = now
        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_price=previous_price,
                new_price=new_price,
                changed_at=now,
            )
        )

    def remove(self):
        """Take the product off sale. The record stays so cancelled orders can still restock it."""
        from marketplace.product.events import ProductRemoved

        if not self.is_listed:
            raise InvalidTransition("Product is already removed")

        now = datetime.now(UTC)
        self.status = ProductStatus.REMOVED.value
        self.updated_at = now
        self.raise_(
            ProductRemoved(
                product_id=self.id,
                seller_id=self.seller_id,
                removed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve(self, quantity):
        """Take `quantity` units and return the unit price they were taken at."""
        from marketplace.product.events import StockReserved

        if quantity < 1:
            raise InvalidInput("Quantity must be at least 1")

        available = self.stock or 0
        if available < quantity:
            raise InsufficientStock(f"Insufficient stock: {available} available, {quantity} requested")

        unit_price = self.price
        now = datetime.now(UTC)
        self.stock = available - quantity
        self.updated_at = now
        self.raise_(
            StockReserved(
                product_id=self.id,
                quantity=quantity,
                previous_stock=available,
                new_stock=self.stock,
                reserved_at=now,
            )
        )
        return unit_price

    def release(self, quantity):
        from marketplace.product.events import StockReleased

        if quantity < 1:
            raise InvalidInput("Quantity must be at least 1")

        previous = self.stock or 0
        now = datetime.now(UTC)
        self.stock = previous + quantity
        self.updated_at = now
        self.raise_(
            StockReleased(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                released_at=now,
            )
        )
