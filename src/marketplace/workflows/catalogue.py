"""Catalogue workflows — seller product management and public browsing."""

import json
import math

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.access import requires
from marketplace.account.account import Account, Role
from marketplace.errors import InvalidInput, NotFound
from marketplace.product.listing import ListProduct
from marketplace.product.management import ChangeProductPrice, RemoveProduct
from marketplace.product.product import Product
from marketplace.utils.locks import product_key
from marketplace.utils.logging import get_logger
from marketplace.workflows.boundary import run_atomically, workflow

logger = get_logger(__name__)


def _amount(raw, label):
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidInput(f"{label} must be a number") from None
    except OverflowError:
        raise InvalidInput(f"{label} is out of range") from None
    if value != value or value < 0:
        raise InvalidInput(f"{label} must be a non-negative amount")
    if math.isinf(value):
        raise InvalidInput(f"{label} is out of range")
    return value


def _stock(raw):
    if raw is None:
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidInput("Stock must be a non-negative integer") from None
    except OverflowError:
        raise InvalidInput("Stock is out of range") from None
    if not value.is_integer() or value < 0:
        raise InvalidInput("Stock must be a non-negative integer")
    return int(value)


def _get_product(product_id) -> Product:
    if not product_id:
        raise NotFound("Product not found")
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound(f"Product {product_id} not found") from None


def describe_products(products) -> list[dict]:
    """Product records joined with their seller's name for display."""
    sellers = current_domain.repository_for(Account).by_ids(p.seller_id for p in products)
    return [_describe(product, sellers.get(str(product.seller_id))) for product in products]


def _describe(product, seller) -> dict:
    return {
        "id": str(product.id),
        "seller_id": str(product.seller_id),
        "seller_name": seller.username if seller else None,
        "category_id": str(product.category_id) if product.category_id else None,
        "name": product.name,
        "price": product.price,
        "stock": product.stock,
        "status": product.status,
        "image_urls": [image.url for image in sorted(product.images, key=lambda i: i.display_order or 0)],
    }


@workflow("add_product")
@requires(Role.SELLER, approved_seller=True)
def add_product(seller, name, price, stock=None, category_id=None, image_urls=None) -> Product:
    command = ListProduct(
        seller_id=seller.account_id,
        name=name,
        price=_amount(price, "Price"),
        stock=_stock(stock),
        category_id=category_id,
        image_urls=json.dumps([str(url) for url in image_urls or []]),
    )
    product_id = run_atomically(command)

    logger.info("product_added", product_id=product_id, seller_id=seller.account_id)
    return _get_product(product_id)


@workflow("change_product_price")
@requires(Role.SELLER, approved_seller=True)
def change_product_price(seller, product_id, price) -> Product:
    if not product_id:
        raise NotFound("Product not found")

    command = ChangeProductPrice(seller_id=seller.account_id, product_id=product_id, price=_amount(price, "Price"))
    run_atomically(command, product_key(product_id))

    logger.info("product_price_changed", product_id=product_id, seller_id=seller.account_id)
    return _get_product(product_id)


@workflow("remove_product")
@requires(Role.SELLER, approved_seller=True)
def remove_product(seller, product_id) -> Product:
    if not product_id:
        raise NotFound("Product not found")

    run_atomically(RemoveProduct(seller_id=seller.account_id, product_id=product_id), product_key(product_id))

    logger.info("product_removed", product_id=product_id, seller_id=seller.account_id)
    return _get_product(product_id)


@workflow("browse_products")
def browse_products(limit=100, offset=0) -> list[dict]:
    return describe_products(current_domain.repository_for(Product).listed(limit=limit, offset=offset))
