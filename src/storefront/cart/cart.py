"""Cart aggregate: one shopping cart per user.

Each line item snapshots the product, size, canonical color and the
effective unit price at the moment it was added. Units of the same
product/size/color (color compared case-insensitively) always share a line.
Totals are refreshed by every mutation through ``cart_totals``.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from storefront.cart.pricing import cart_totals
from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock, InvalidQuantity, ItemNotFound


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    size = String(required=True, max_length=4)
    color = String(required=True, max_length=50)
    price = Float(required=True, min_value=0.0)
    added_at = DateTime()

    def same_line(self, product_id, size, color):
        return str(self.product_id) == str(product_id) and self.size == size and self.color.lower() == color.lower()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    total_items = Integer(min_value=0, default=0)
    total_price = Float(min_value=0.0, default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product_size_and_color(self):
        keys = [(str(i.product_id), i.size, i.color.lower()) for i in self.items]
        if len(keys) != len(set(keys)):
            raise ValidationError({"items": ["A product, size and color combination may only appear once"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, total_items=0, total_price=0.0, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ItemNotFound()
        return item

    def _line_for(self, product_id, size, color):
        return next((i for i in self.items if i.same_line(product_id, size, color)), None)

    def _refresh_totals(self, now):
        totals = cart_totals(self.items)
        self.total_items = totals.total_items
        self.total_price = totals.total_price
        self.updated_at = now

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, size, color, quantity, unit_price, stock):
        """Add units to the cart, merging into an existing line when one matches.

        ``color`` must already be the catalog's canonical spelling and
        ``stock`` the current count for ``size``. A merged line keeps the
        unit price it was first added at.
        """
        if quantity is None or quantity < 1:
            raise InvalidQuantity("Quantity must be at least 1")
        if quantity > stock:
            raise InsufficientStock()

        now = datetime.now(UTC)
        existing = self._line_for(product_id, size, color)

        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > stock:
                raise InsufficientStock("Insufficient stock for requested quantity")
            existing.quantity = new_quantity
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                size=size,
                color=color,
                price=unit_price,
                added_at=now,
            )
            self.add_items(item)

        self._refresh_totals(now)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product_id),
                size=size,
                color=item.color,
                quantity=quantity,
                line_quantity=item.quantity,
                unit_price=item.price,
                merged=existing is not None,
                total_items=self.total_items,
                total_price=self.total_price,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity, stock):
        """Overwrite a line's quantity; ``stock`` is the current count for the line's size."""
        if quantity is None or quantity < 1:
            raise InvalidQuantity()

        item = self.find_item(item_id)
        if quantity > stock:
            raise InsufficientStock()

        previous_quantity = item.quantity
        item.quantity = quantity
        self._refresh_totals(datetime.now(UTC))

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                total_items=self.total_items,
                total_price=self.total_price,
            )
        )
        return item

    def remove_item(self, item_id):
        """Drop a line if present. Removing an id that is not in the cart is a no-op."""
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is not None:
            self.remove_items(item)

        self._refresh_totals(datetime.now(UTC))

        if item is not None:
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    user_id=str(self.user_id),
                    item_id=str(item.id),
                    product_id=str(item.product_id),
                    total_items=self.total_items,
                    total_price=self.total_price,
                )
            )
        return item is not None

    def clear(self):
        removed = list(self.items)
        if removed:
            self.remove_items(removed)

        now = datetime.now(UTC)
        self._refresh_totals(now)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                removed_items=len(removed),
                cleared_at=now,
            )
        )
