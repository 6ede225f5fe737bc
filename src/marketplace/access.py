"""Role-gated access control.

Every workflow declares who may call it with `@requires(...)`. The acting
account id is always passed in explicitly; it is resolved to an `Actor`
(account id, role, seller approval) before any workflow logic runs, so a
rejected call has no side effects.

    Buyer               cart, place order, own orders, cancel own order
    Approved Seller     products, seller orders, status updates, seller cancel
    Authorizer          all orders, seller registration review
"""

from functools import wraps
from typing import NamedTuple

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.account.account import Account, Role
from marketplace.account.approval import SellerApproval
from marketplace.errors import Forbidden, Unauthenticated


class Actor(NamedTuple):
    account_id: str
    role: Role
    seller_approved: bool = False


def resolve_actor(account_id) -> Actor:
    """Look up the account behind an identity, or fail with Unauthenticated."""
    if account_id is None or not str(account_id).strip():
        raise Unauthenticated("Login required")

    try:
        account = current_domain.repository_for(Account).get(str(account_id).strip())
    except ObjectNotFoundError:
        raise Unauthenticated("Login required") from None

    role = Role(account.role)
    approved = False
    if role == Role.SELLER:
        approval = current_domain.repository_for(SellerApproval).for_account(account.id)
        approved = approval is not None and approval.is_approved

    return Actor(account_id=str(account.id), role=role, seller_approved=approved)


def authorize(account_id, roles, approved_seller=False) -> Actor:
    actor = resolve_actor(account_id)

    if actor.role not in roles:
        wanted = " or ".join(sorted(role.value for role in roles))
        raise Forbidden(f"{wanted} access required")
    if approved_seller and actor.role == Role.SELLER and not actor.seller_approved:
        raise Forbidden("Seller registration is not approved")

    return actor


def requires(*roles, approved_seller=False):
    """Gate a workflow whose first argument is the acting account id.

    The wrapped function receives the resolved `Actor` in place of the id.
    """
    permitted = frozenset(roles)

    def decorator(fn):
        @wraps(fn)
        def wrapper(account_id, *args, **kwargs):
            actor = authorize(account_id, permitted, approved_seller=approved_seller)
            return fn(actor, *args, **kwargs)

        wrapper.permitted_roles = permitted
        return wrapper

    return decorator
