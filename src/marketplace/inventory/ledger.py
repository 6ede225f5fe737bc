"""Inventory ledger — the only path through which product stock moves.

Both operations load, mutate and stage the product through the current unit
of work, so they commit or roll back together with the caller's order write.
Callers hold the product's row lock (`marketplace.utils.locks`) around the
whole unit of work.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.domain import logger
from marketplace.errors import NotFound
from marketplace.product.product import Product


class InventoryLedger:
    def __init__(self):
        self._products = current_domain.repository_for(Product)

    def _load(self, product_id) -> Product:
        try:
            return self._products.get(product_id)
        except ObjectNotFoundError:
            raise NotFound(f"Product {product_id} not found") from None

    def reserve(self, product_id, quantity) -> tuple[Product, float]:
        """Decrement stock by `quantity`; return the product and its pre-reservation unit price."""
        product = self._load(product_id)
        if not product.is_listed:
            raise NotFound(f"Product {product_id} not found")

        unit_price = product.reserve(quantity)
        self._products.add(product)
        logger.debug("stock_reserved", product_id=str(product_id), quantity=quantity, stock=product.stock)
        return product, unit_price

    def release(self, product_id, quantity) -> Product:
        product = self._load(product_id)
        product.release(quantity)
        self._products.add(product)
        logger.debug("stock_released", product_id=str(product_id), quantity=quantity, stock=product.stock)
        return product
