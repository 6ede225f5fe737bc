"""Marketplace error taxonomy.

Aggregates raise these for business-rule violations. The workflow boundary
(`marketplace.workflows.boundary`) translates framework and storage errors
into the same taxonomy, so callers only ever see a `MarketplaceError`.
"""


class MarketplaceError(Exception):
    """Base class for every failure surfaced by a marketplace workflow."""

    code = "error"
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.code, "message": self.message}


class Unauthenticated(MarketplaceError):
    """No acting identity, or an identity that does not resolve to an account."""

    code = "unauthenticated"


class Forbidden(MarketplaceError):
    """The actor has the wrong role, is not an approved seller, or does not own the target."""

    code = "forbidden"


class NotFound(MarketplaceError):
    """The product, order or registration does not exist or is not visible to the actor."""

    code = "not_found"


class InvalidInput(MarketplaceError):
    code = "invalid_input"


class AlreadyExists(MarketplaceError):
    """A unique value, such as an account email, is already taken."""

    code = "already_exists"


class InsufficientStock(MarketplaceError):
    code = "insufficient_stock"


class InvalidTransition(MarketplaceError):
    """The requested status change is not an edge of the lifecycle table."""

    code = "invalid_transition"


class StorageConflict(MarketplaceError):
    """A lock wait timed out or a concurrent write won. Safe to retry."""

    code = "storage_conflict"
    retryable = True
