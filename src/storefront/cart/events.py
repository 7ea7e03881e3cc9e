"""Domain events for the Cart aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """Units of a product/size/color landed in the cart.

    ``merged`` is true when the units were folded into an existing line.
    """

    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)
    size: String(required=True)
    color: String(required=True)
    quantity: Integer(required=True)
    line_quantity: Integer(required=True)
    unit_price: Float(required=True)
    merged: Boolean(default=False)
    total_items: Integer(required=True)
    total_price: Float(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)
    total_items: Integer(required=True)
    total_price: Float(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)
    total_items: Integer(required=True)
    total_price: Float(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    removed_items: Integer(required=True)
    cleared_at: DateTime(required=True)
