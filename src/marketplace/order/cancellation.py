"""Order cancellation — command and handler.

Buyers cancel their own orders, sellers cancel orders for their own
products. The status flip and the restock share one unit of work, and a
cancelled order is terminal, so stock comes back exactly once.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.account.account import Role
from marketplace.domain import marketplace
from marketplace.errors import Forbidden, NotFound
from marketplace.inventory.ledger import InventoryLedger
from marketplace.order.order import Order


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


def load_order(repo, order_id) -> Order:
    try:
        return repo.get(order_id)
    except ObjectNotFoundError:
        raise NotFound(f"Order {order_id} not found") from None


def cancel_and_restock(order, acting_role):
    """Flip the order to Cancelled and return its quantity to stock."""
    order.cancel(acting_role)
    InventoryLedger().release(order.product_id, order.quantity)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = load_order(repo, command.order_id)

        role = Role.parse(command.actor_role)
        if role == Role.SELLER:
            order.assert_sold_by(command.actor_id)
        elif role == Role.BUYER:
            order.assert_placed_by(command.actor_id)
        else:
            raise Forbidden(f"A {role.value} cannot cancel orders")

        cancel_and_restock(order, role)
        repo.add(order)
        return str(order.id)
