"""Cart totals.

Totals are derived from line items only and are recomputed explicitly by
every cart mutation, so they can never drift from the items they describe.
"""

from typing import NamedTuple


class CartTotals(NamedTuple):
    total_items: int
    total_price: float


def line_total(quantity, unit_price) -> float:
    return quantity * unit_price


def cart_totals(items) -> CartTotals:
    """Sum quantities and ``quantity x unit price`` over ``items``, price rounded to cents."""
    total_items = sum(item.quantity for item in items)
    total_price = sum(line_total(item.quantity, item.price) for item in items)
    return CartTotals(total_items=total_items, total_price=round(total_price, 2))
