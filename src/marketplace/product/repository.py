"""Repository for the Product aggregate."""

from marketplace.domain import marketplace
from marketplace.product.product import Product, ProductStatus


@marketplace.repository(part_of=Product)
class ProductRepository:
    def listed(self, limit: int = 100, offset: int = 0) -> list[Product]:
        """Products currently for sale, newest first."""
        return (
            self._dao.query.filter(status=ProductStatus.LISTED.value)
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
            .items
        )

    def by_ids(self, product_ids) -> dict:
        """Map of id to Product for the given ids, removed products included."""
        ids = {str(product_id) for product_id in product_ids}
        if not ids:
            return {}
        products = self._dao.query.filter(id__in=list(ids)).limit(len(ids)).all().items
        return {str(product.id): product for product in products}
