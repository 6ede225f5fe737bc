"""Order placement — command and handler.

Reserving stock and recording the order happen in the handler's unit of
work: either both persist or neither does.
"""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.inventory.ledger import InventoryLedger
from marketplace.order.order import CASH_ON_DELIVERY, Order


@marketplace.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    address = Text(required=True)
    payment_method = String(max_length=50, default=CASH_ON_DELIVERY)


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        product, unit_price = InventoryLedger().reserve(command.product_id, command.quantity)

        order = Order.place(
            buyer_id=command.buyer_id,
            product_id=command.product_id,
            seller_id=product.seller_id,
            quantity=command.quantity,
            unit_price=unit_price,
            address=command.address,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
