"""Application tests for buyer, seller and authorizer order listings."""

from marketplace.order.order import CASH_ON_DELIVERY
from marketplace.workflows import all_orders, buyer_orders, place_order, seller_orders


def _place(buyer, product_id, quantity=1):
    return place_order(buyer, product_id, quantity=quantity, address="12 Harbour Road", payment_method=CASH_ON_DELIVERY)


def test_buyer_sees_only_own_orders(buyer, other_buyer, product):
    mine = _place(buyer, product)
    _place(other_buyer, product)

    views = buyer_orders(buyer)

    assert [v["id"] for v in views] == [str(mine.id)]
    assert views[0]["product_name"] == "Hand-thrown Mug"
    assert views[0]["seller_name"] == "potter"
    assert views[0]["buyer_name"] == "asha"


def test_seller_sees_only_orders_for_own_products(buyer, seller, other_seller, make_product):
    mine = make_product(name="Mug")
    theirs = make_product(name="Rug", owner=other_seller)
    order = _place(buyer, mine)
    _place(buyer, theirs)

    assert [v["id"] for v in seller_orders(seller)] == [str(order.id)]
    assert [v["product_name"] for v in seller_orders(other_seller)] == ["Rug"]


def test_image_url_is_first_image(buyer, make_product):
    product_id = make_product(image_urls=["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"])
    _place(buyer, product_id)

    assert buyer_orders(buyer)[0]["image_url"] == "https://cdn.example.com/a.jpg"


def test_all_orders_is_paginated(buyer, authorizer, make_product):
    product_id = make_product(stock=10)
    for _ in range(3):
        _place(buyer, product_id)

    assert len(all_orders(authorizer)) == 3
    assert len(all_orders(authorizer, limit=2)) == 2
    assert len(all_orders(authorizer, limit=2, offset=2)) == 1
