"""Tests for order payload builders"""
from fishcart.cart import Cart
from fishcart.orders import build_cart_items_payload, build_order_summary


def test_cart_items_payload(make_item):
    """Test payload keeps cart order and only ids and quantities"""
    cart = Cart(items=[make_item("b", quantity=2), make_item("a", quantity=0.5)])

    assert build_cart_items_payload(cart) == [
        {"productId": "b", "quantity": 2},
        {"productId": "a", "quantity": 0.5},
    ]


def test_cart_items_payload_empty():
    assert build_cart_items_payload(Cart()) == []


def test_order_summary(make_item):
    """Test summary carries the derived values"""
    cart = Cart(items=[
        make_item("a", price_per_kg=10, quantity=2),
        make_item("b", price_per_kg=5, quantity=3),
    ])

    summary = build_order_summary(cart)

    assert summary["itemCount"] == 2
    assert summary["totalPrice"] == 35
    assert [record["productId"] for record in summary["items"]] == ["a", "b"]
