"""Application tests for account registration and the seller approval gate."""

import pytest
from marketplace.account.account import Account, Role
from marketplace.account.approval import ApprovalStatus, SellerApproval
from marketplace.errors import AlreadyExists, Forbidden, InvalidInput, InvalidTransition, NotFound
from marketplace.workflows import (
    add_product,
    grant_authorizer,
    pending_registrations,
    register_account,
    review_seller_registration,
)
from protean import current_domain


def _role(account_id):
    return current_domain.repository_for(Account).get(account_id).role


class TestRegistration:
    def test_buyer_has_no_approval_record(self, register):
        buyer = register("asha")
        assert _role(buyer) == Role.BUYER.value
        assert current_domain.repository_for(SellerApproval).for_account(buyer) is None

    def test_seller_starts_pending(self, register):
        seller = register("potter", role="Seller")

        approval = current_domain.repository_for(SellerApproval).for_account(seller)
        assert approval.status == ApprovalStatus.PENDING.value

    def test_duplicate_email(self, register):
        register("asha", email="asha@example.com")
        with pytest.raises(AlreadyExists, match="Email already exists"):
            register_account("asha2", "ASHA@example.com", "Buyer")

    def test_cannot_register_as_authorizer(self):
        with pytest.raises(InvalidInput):
            register_account("mallory", "mallory@example.com", "Authorizer")

    def test_missing_username(self):
        with pytest.raises(InvalidInput):
            register_account(None, "x@example.com", "Buyer")


class TestReview:
    def test_pending_seller_cannot_sell(self, register):
        seller = register("potter", role="Seller")
        with pytest.raises(Forbidden, match="not approved"):
            add_product(seller, name="Mug", price=10.0, stock=1)

    def test_approved_seller_can_sell(self, register, authorizer):
        seller = register("potter", role="Seller")

        approval = review_seller_registration(authorizer, seller, "approved")

        assert approval.status == ApprovalStatus.APPROVED.value
        assert str(approval.reviewer_id) == authorizer
        product = add_product(seller, name="Mug", price=10.0, stock=1)
        assert product.is_listed

    def test_rejected_seller_is_demoted_and_forbidden(self, register, authorizer):
        seller = register("potter", role="Seller")

        review_seller_registration(authorizer, seller, "rejected")

        assert _role(seller) == Role.BUYER.value
        with pytest.raises(Forbidden):
            add_product(seller, name="Mug", price=10.0, stock=1)
        assert _role(seller) == Role.BUYER.value

    def test_review_twice(self, register, authorizer):
        seller = register("potter", role="Seller")
        review_seller_registration(authorizer, seller, "approved")

        with pytest.raises(InvalidTransition):
            review_seller_registration(authorizer, seller, "rejected")

        assert _role(seller) == Role.SELLER.value

    def test_unknown_decision(self, register, authorizer):
        seller = register("potter", role="Seller")
        with pytest.raises(InvalidInput):
            review_seller_registration(authorizer, seller, "maybe")

    def test_no_registration(self, authorizer, buyer):
        with pytest.raises(NotFound):
            review_seller_registration(authorizer, buyer, "approved")

    def test_only_authorizers_review(self, register, buyer):
        seller = register("potter", role="Seller")
        with pytest.raises(Forbidden):
            review_seller_registration(buyer, seller, "approved")
        with pytest.raises(Forbidden):
            review_seller_registration(seller, seller, "approved")


class TestPendingRegistrations:
    def test_lists_only_pending(self, register, authorizer):
        first = register("potter", role="Seller")
        second = register("weaver", role="Seller")
        review_seller_registration(authorizer, first, "approved")

        pending = pending_registrations(authorizer)

        assert [p["seller_id"] for p in pending] == [second]
        assert pending[0]["username"] == "weaver"
        assert pending[0]["email"] == "weaver@example.com"


class TestGrantAuthorizer:
    def test_grant_to_buyer(self, register):
        account_id = register("root")
        assert grant_authorizer(account_id).role == Role.AUTHORIZER.value

    def test_grant_to_seller(self, register):
        seller = register("potter", role="Seller")
        with pytest.raises(InvalidTransition):
            grant_authorizer(seller)

    def test_unknown_account(self):
        with pytest.raises(NotFound):
            grant_authorizer("no-such-account")
