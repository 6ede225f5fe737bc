"""Account workflows — registration, the seller approval gate and role grants."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.access import requires
from marketplace.account.account import Account, Role
from marketplace.account.approval import SellerApproval
from marketplace.account.authorization import GrantAuthorizerRole
from marketplace.account.registration import RegisterAccount
from marketplace.account.review import ReviewSellerRegistration
from marketplace.errors import NotFound
from marketplace.utils.locks import account_key, email_key
from marketplace.utils.logging import get_logger
from marketplace.workflows.boundary import run_atomically, workflow

logger = get_logger(__name__)


def _get_account(account_id) -> Account:
    try:
        return current_domain.repository_for(Account).get(account_id)
    except ObjectNotFoundError:
        raise NotFound(f"Account {account_id} not found") from None


@workflow("register_account")
def register_account(username, email, role) -> Account:
    account_id = run_atomically(RegisterAccount(username=username, email=email, role=role), email_key(email))

    logger.info("account_registered", account_id=account_id, role=role)
    return _get_account(account_id)


@workflow("grant_authorizer")
def grant_authorizer(account_id) -> Account:
    """Operator-only: promote an existing buyer to Authorizer."""
    if not account_id:
        raise NotFound("Account not found")
    account = _get_account(account_id)

    run_atomically(GrantAuthorizerRole(account_id=account.id), account_key(account.id))

    logger.info("authorizer_granted", account_id=str(account.id))
    return _get_account(account.id)


@workflow("review_seller_registration")
@requires(Role.AUTHORIZER)
def review_seller_registration(authorizer, seller_id, decision) -> SellerApproval:
    if not seller_id:
        raise NotFound("Seller registration not found")

    command = ReviewSellerRegistration(seller_id=seller_id, decision=decision, reviewer_id=authorizer.account_id)
    approval_id = run_atomically(command, account_key(seller_id))

    approval = current_domain.repository_for(SellerApproval).get(approval_id)
    logger.info(
        "seller_registration_reviewed",
        seller_id=str(seller_id),
        decision=approval.status,
        reviewer_id=authorizer.account_id,
    )
    return approval


@workflow("pending_registrations")
@requires(Role.AUTHORIZER)
def pending_registrations(authorizer) -> list[dict]:
    approvals = current_domain.repository_for(SellerApproval).pending()
    accounts = current_domain.repository_for(Account).by_ids(a.account_id for a in approvals)

    views = []
    for approval in approvals:
        account = accounts.get(str(approval.account_id))
        views.append(
            {
                "seller_id": str(approval.account_id),
                "username": account.username if account else None,
                "email": account.email if account else None,
                "status": approval.status,
                "requested_at": approval.requested_at.isoformat() if approval.requested_at else None,
            }
        )
    return views
