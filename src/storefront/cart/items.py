"""Cart item management: commands and handler.

Each handler is one read-validate-write cycle: resolve the product from the
catalog, validate the request against it, mutate the cart and save it.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import InvalidInputError, InvalidQuantity, StorefrontError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier()
    quantity = Integer(default=1)
    size = String(max_length=4)
    color = String(max_length=50)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier()
    quantity = Integer()


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        if not (command.product_id and command.size and command.color):
            raise InvalidInputError("Product ID, size, and color are required")

        products = current_domain.repository_for(Product)
        carts = current_domain.repository_for(Cart)

        try:
            product = products.find_available(command.product_id)
            size = product.find_size(command.size)
            color = product.find_color(command.color)

            cart = carts.get_or_create(command.user_id)
            item = cart.add_item(
                product_id=product.id,
                size=size.size,
                color=color,
                quantity=command.quantity,
                unit_price=product.final_price(),
                stock=size.stock,
            )
        except StorefrontError as exc:
            _log_rejection("add", command, exc)
            raise

        carts.add(cart)

        logger.info(
            "Cart item added",
            user_id=str(command.user_id),
            cart_id=str(cart.id),
            item_id=str(item.id),
            product_id=str(product.id),
            quantity=command.quantity,
            total_items=cart.total_items,
            total_price=cart.total_price,
        )
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        if not command.item_id or command.quantity is None or command.quantity < 1:
            raise InvalidQuantity()

        carts = current_domain.repository_for(Cart)

        try:
            cart = carts.get_for_user(command.user_id)
            item = cart.find_item(command.item_id)

            # Stock is re-read from the catalog; the line's own snapshot is only its price
            product = current_domain.repository_for(Product).find_available(item.product_id)
            size = product.find_size(item.size)

            cart.update_item_quantity(command.item_id, command.quantity, stock=size.stock)
        except StorefrontError as exc:
            _log_rejection("update", command, exc)
            raise

        carts.add(cart)

        logger.info(
            "Cart item quantity updated",
            user_id=str(command.user_id),
            cart_id=str(cart.id),
            item_id=str(command.item_id),
            quantity=command.quantity,
            total_price=cart.total_price,
        )
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        carts = current_domain.repository_for(Cart)
        cart = carts.get_for_user(command.user_id)

        removed = cart.remove_item(command.item_id)
        carts.add(cart)

        logger.info(
            "Cart item removed" if removed else "Cart item already absent",
            user_id=str(command.user_id),
            cart_id=str(cart.id),
            item_id=str(command.item_id),
        )
        return str(cart.id)


def _log_rejection(action, command, exc):
    logger.info(
        "Cart mutation rejected",
        action=action,
        user_id=str(command.user_id),
        reason=exc.__class__.__name__,
        message=exc.message,
    )

