"""Marketplace bounded context — accounts, catalogue, carts and orders.

Product stock and orders live in one domain so that placing or cancelling
an order commits the stock movement and the order change in a single
unit of work.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
