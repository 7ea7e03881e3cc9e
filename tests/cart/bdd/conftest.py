"""Shared BDD fixtures and step definitions for the cart."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.cart import Cart


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an empty cart for user "{user_id}"'), target_fixture="cart")
def empty_cart(user_id):
    return Cart.create(user_id=user_id)


@given(
    parsers.cfparse(
        'the cart holds {quantity:d} units of product "{product_id}" size "{size}" color "{color}" at {price:f}'
    ),
    target_fixture="cart",
)
def cart_holds(cart, quantity, product_id, size, color, price):
    cart.add_item(
        product_id=product_id,
        size=size,
        color=color,
        quantity=quantity,
        unit_price=price,
        stock=quantity,
    )
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.re(r"the cart has (?P<count>\d+) lines?"), converters={"count": int})
def cart_has_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart totals are {items:d} items and {price:f}"))
def cart_totals_are(cart, items, price):
    assert cart.total_items == items
    assert cart.total_price == pytest.approx(price)


@then(parsers.cfparse('the cart action fails with "{message}"'))
def cart_action_fails(error, message):
    assert isinstance(error["exc"], ValidationError)
    assert error["exc"].message == message
