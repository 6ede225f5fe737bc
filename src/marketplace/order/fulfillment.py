"""Order fulfillment — command and handler for seller status updates."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.account.account import Role
from marketplace.domain import marketplace
from marketplace.order.cancellation import cancel_and_restock, load_order
from marketplace.order.order import Order, OrderStatus


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    """Seller moves an order along the lifecycle. Requesting Cancelled also restocks."""

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    new_status = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = load_order(repo, command.order_id)
        order.assert_sold_by(command.seller_id)

        target = OrderStatus.parse(command.new_status)
        if target == OrderStatus.CANCELLED:
            cancel_and_restock(order, Role.SELLER)
        else:
            order.transition(target, Role.SELLER)

        repo.add(order)
        return str(order.id)
