"""Repository for the Order aggregate."""

from marketplace.domain import marketplace
from marketplace.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    """Read queries backing the buyer, seller and authorizer order views. Newest first."""

    def placed_by(self, buyer_id, limit: int = 100, offset: int = 0) -> list[Order]:
        return (
            self._dao.query.filter(buyer_id=str(buyer_id))
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
            .items
        )

    def sold_by(self, seller_id, limit: int = 100, offset: int = 0) -> list[Order]:
        return (
            self._dao.query.filter(seller_id=str(seller_id))
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
            .items
        )

    def recent(self, limit: int = 100, offset: int = 0) -> list[Order]:
        return self._dao.query.order_by("-created_at").offset(offset).limit(limit).all().items
