"""Seller registration review — command and handler.

A rejection demotes the seller's account to Buyer in the same unit of work
as the approval record changes.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.account.account import Account
from marketplace.account.approval import ApprovalStatus, SellerApproval
from marketplace.domain import marketplace
from marketplace.errors import NotFound


@marketplace.command(part_of="SellerApproval")
class ReviewSellerRegistration:
    seller_id = Identifier(required=True)
    decision = String(required=True, max_length=20)
    reviewer_id = Identifier(required=True)


@marketplace.command_handler(part_of=SellerApproval)
class ReviewSellerRegistrationHandler:
    @handle(ReviewSellerRegistration)
    def review_seller_registration(self, command):
        approvals = current_domain.repository_for(SellerApproval)
        approval = approvals.for_account(command.seller_id)
        if approval is None:
            raise NotFound(f"No seller registration for account {command.seller_id}")

        outcome = approval.review(command.decision, reviewer_id=command.reviewer_id)
        approvals.add(approval)

        if outcome == ApprovalStatus.REJECTED:
            accounts = current_domain.repository_for(Account)
            account = accounts.get(command.seller_id)
            account.demote_to_buyer()
            accounts.add(account)

        return str(approval.id)
