"""Domain events for the Account and SellerApproval aggregates."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Account")
class AccountRegistered:
    """A new buyer or seller account joined the marketplace."""

    __version__ = 1

    account_id = Identifier(required=True)
    username = String(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class AccountRoleChanged:
    """An account moved along one of the permitted role changes."""

    __version__ = 1

    account_id = Identifier(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)
    reason = String()
    changed_at = DateTime(required=True)


@marketplace.event(part_of="SellerApproval")
class SellerApprovalRequested:
    """A seller registration is waiting for an authorizer's review."""

    __version__ = 1

    approval_id = Identifier(required=True)
    account_id = Identifier(required=True)
    requested_at = DateTime(required=True)


@marketplace.event(part_of="SellerApproval")
class SellerRegistrationReviewed:
    """An authorizer approved or rejected a seller registration."""

    __version__ = 1

    approval_id = Identifier(required=True)
    account_id = Identifier(required=True)
    decision = String(required=True)
    reviewer_id = Identifier(required=True)
    reviewed_at = DateTime(required=True)
