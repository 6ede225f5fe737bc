"""CartEntry aggregate — one line in a buyer's cart.

Each add creates an independent line; two lines for the same product can
coexist. Adding to the cart does not touch stock.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.aggregate
class CartEntry:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @classmethod
    def add(cls, buyer_id, product_id, quantity):
        from marketplace.cart.events import CartEntryAdded

        now = datetime.now(UTC)
        entry = cls(buyer_id=buyer_id, product_id=product_id, quantity=quantity, added_at=now)
        entry.raise_(
            CartEntryAdded(
                entry_id=entry.id,
                buyer_id=buyer_id,
                product_id=product_id,
                quantity=quantity,
                added_at=now,
            )
        )
        return entry


@marketplace.repository(part_of=CartEntry)
class CartEntryRepository:
    def for_buyer(self, buyer_id) -> list[CartEntry]:
        return self._dao.query.filter(buyer_id=str(buyer_id)).order_by("added_at").all().items
