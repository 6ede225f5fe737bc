"""Tests for the SellerApproval aggregate."""

import pytest
from marketplace.account.approval import ApprovalStatus, SellerApproval
from marketplace.account.events import SellerApprovalRequested, SellerRegistrationReviewed
from marketplace.errors import InvalidInput, InvalidTransition


def _pending():
    approval = SellerApproval.request("seller-001")
    approval._events.clear()
    return approval


def test_request_starts_pending():
    approval = SellerApproval.request("seller-001")
    assert approval.status == ApprovalStatus.PENDING.value
    assert not approval.is_approved
    assert isinstance(approval._events[0], SellerApprovalRequested)


@pytest.mark.parametrize("decision", ["approved", "Approved", " APPROVED "])
def test_approve(decision):
    approval = _pending()

    outcome = approval.review(decision, reviewer_id="auth-001")

    assert outcome == ApprovalStatus.APPROVED
    assert approval.is_approved
    assert approval.reviewer_id == "auth-001"
    assert approval.reviewed_at is not None
    assert isinstance(approval._events[-1], SellerRegistrationReviewed)


def test_reject():
    approval = _pending()
    assert approval.review("rejected", reviewer_id="auth-001") == ApprovalStatus.REJECTED
    assert approval.status == ApprovalStatus.REJECTED.value
    assert not approval.is_approved


@pytest.mark.parametrize("decision", ["maybe", "pending", "", None])
def test_unknown_decision(decision):
    approval = _pending()
    with pytest.raises(InvalidInput):
        approval.review(decision, reviewer_id="auth-001")
    assert approval.status == ApprovalStatus.PENDING.value


def test_second_review_is_invalid_transition():
    approval = _pending()
    approval.review("approved", reviewer_id="auth-001")
    with pytest.raises(InvalidTransition):
        approval.review("rejected", reviewer_id="auth-001")
    assert approval.is_approved
