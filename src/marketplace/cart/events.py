"""Domain events for the CartEntry aggregate."""

from protean.fields import DateTime, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="CartEntry")
class CartEntryAdded:
    __version__ = 1

    entry_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    added_at = DateTime(required=True)
