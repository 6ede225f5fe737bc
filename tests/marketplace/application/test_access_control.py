"""Application tests for role-gated access to every workflow."""

import pytest
from marketplace import workflows
from marketplace.access import resolve_actor
from marketplace.account.account import Role
from marketplace.errors import Forbidden, Unauthenticated
from marketplace.order.order import CASH_ON_DELIVERY, Order
from protean import current_domain

BUYER_ONLY = [
    ("add_to_cart", ("prod-001", 1)),
    ("view_cart", ()),
    ("place_order", ("prod-001", 1, "12 Harbour Road", CASH_ON_DELIVERY)),
    ("buyer_orders", ()),
    ("buyer_cancel", ("order-001",)),
]

SELLER_ONLY = [
    ("add_product", ("Mug", 10.0, 1)),
    ("change_product_price", ("prod-001", 12.0)),
    ("remove_product", ("prod-001",)),
    ("seller_orders", ()),
    ("seller_update_status", ("order-001", "Packed")),
    ("seller_cancel", ("order-001",)),
]

AUTHORIZER_ONLY = [
    ("all_orders", ()),
    ("pending_registrations", ()),
    ("review_seller_registration", ("seller-001", "approved")),
]

ALL_GATED = BUYER_ONLY + SELLER_ONLY + AUTHORIZER_ONLY


class TestUnauthenticated:
    @pytest.mark.parametrize("name, args", ALL_GATED)
    @pytest.mark.parametrize("identity", [None, "", "unknown-account"])
    def test_missing_or_unknown_identity(self, name, args, identity):
        with pytest.raises(Unauthenticated):
            getattr(workflows, name)(identity, *args)


class TestWrongRole:
    @pytest.mark.parametrize("name, args", SELLER_ONLY + AUTHORIZER_ONLY)
    def test_buyer(self, buyer, name, args):
        with pytest.raises(Forbidden):
            getattr(workflows, name)(buyer, *args)

    @pytest.mark.parametrize("name, args", BUYER_ONLY + AUTHORIZER_ONLY)
    def test_seller(self, seller, name, args):
        with pytest.raises(Forbidden):
            getattr(workflows, name)(seller, *args)

    @pytest.mark.parametrize("name, args", BUYER_ONLY + SELLER_ONLY)
    def test_authorizer(self, authorizer, name, args):
        with pytest.raises(Forbidden):
            getattr(workflows, name)(authorizer, *args)

    @pytest.mark.parametrize("name, args", SELLER_ONLY)
    def test_unapproved_seller(self, register, name, args):
        pending = register("newcomer", role="Seller")
        with pytest.raises(Forbidden):
            getattr(workflows, name)(pending, *args)


class TestNoSideEffects:
    def test_rejected_order_writes_nothing(self, seller, product):
        with pytest.raises(Forbidden):
            workflows.place_order(seller, product, 1, "12 Harbour Road", CASH_ON_DELIVERY)
        assert current_domain.repository_for(Order).recent() == []


class TestResolveActor:
    def test_approved_seller(self, seller):
        actor = resolve_actor(seller)
        assert actor.role == Role.SELLER
        assert actor.seller_approved

    def test_buyer(self, buyer):
        actor = resolve_actor(f"  {buyer} ")
        assert actor.account_id == buyer
        assert actor.role == Role.BUYER
        assert not actor.seller_approved

    def test_declared_roles(self):
        assert workflows.place_order.permitted_roles == {Role.BUYER}
        assert workflows.all_orders.permitted_roles == {Role.AUTHORIZER}
