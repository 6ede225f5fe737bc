"""SellerApproval aggregate — the gate between registering as a seller and selling.

Every seller account gets exactly one approval record when it registers.
The record starts ``pending`` and an authorizer moves it once, to either
``approved`` or ``rejected``. Only an approved record unlocks seller
capabilities.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace
from marketplace.errors import InvalidInput, InvalidTransition


class ApprovalStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


_DECISIONS = {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}


@marketplace.aggregate
class SellerApproval:
    account_id = Identifier(required=True, unique=True)
    status = String(choices=ApprovalStatus, default=ApprovalStatus.PENDING.value)
    reviewer_id = Identifier()
    requested_at = DateTime()
    reviewed_at = DateTime()

    @classmethod
    def request(cls, account_id):
        from marketplace.account.events import SellerApprovalRequested

        now = datetime.now(UTC)
        approval = cls(
            account_id=account_id,
            status=ApprovalStatus.PENDING.value,
            requested_at=now,
        )
        approval.raise_(
            SellerApprovalRequested(
                approval_id=approval.id,
                account_id=account_id,
                requested_at=now,
            )
        )
        return approval

    @property
    def is_approved(self):
        return self.status == ApprovalStatus.APPROVED.value

    def review(self, decision, reviewer_id):
        from marketplace.account.events import SellerRegistrationReviewed

        outcome = next(
            (d for d in _DECISIONS if isinstance(decision, str) and d.value == decision.strip().lower()),
            None,
        )
        if outcome is None:
            raise InvalidInput(f"Decision must be 'approved' or 'rejected', got {decision!r}")

        if self.status != ApprovalStatus.PENDING.value:
            raise InvalidTransition(f"Registration was already {self.status}")

        now = datetime.now(UTC)
        self.status = outcome.value
        self.reviewer_id = reviewer_id
        self.reviewed_at = now
        self.raise_(
            SellerRegistrationReviewed(
                approval_id=self.id,
                account_id=self.account_id,
                decision=outcome.value,
                reviewer_id=reviewer_id,
                reviewed_at=now,
            )
        )
        return outcome


@marketplace.repository(part_of=SellerApproval)
class SellerApprovalRepository:
    def for_account(self, account_id) -> SellerApproval | None:
        return self._dao.query.filter(account_id=str(account_id)).all().first

    def pending(self) -> list[SellerApproval]:
        return self._dao.query.filter(status=ApprovalStatus.PENDING.value).order_by("requested_at").all().items
