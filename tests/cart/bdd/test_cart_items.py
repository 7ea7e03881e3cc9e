"""BDD tests for cart line items."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, when

scenarios("features/cart_items.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse(
        '{quantity:d} units of product "{product_id}" size "{size}" color "{color}" '
        "are added at {price:f} with {stock:d} in stock"
    )
)
def add_units(cart, error, quantity, product_id, size, color, price, stock):
    try:
        cart.add_item(
            product_id=product_id,
            size=size,
            color=color,
            quantity=quantity,
            unit_price=price,
            stock=stock,
        )
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the line quantity is changed to {quantity:d} with {stock:d} in stock"))
def change_quantity(cart, error, quantity, stock):
    try:
        cart.update_item_quantity(cart.items[0].id, quantity, stock)
    except ValidationError as exc:
        error["exc"] = exc


@when("the line is removed")
def remove_line(cart):
    cart.remove_item(cart.items[0].id)


@when("the cart is cleared")
def clear_cart(cart):
    cart.clear()
