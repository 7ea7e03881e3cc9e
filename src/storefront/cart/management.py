"""Whole-cart management: clearing a cart."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        carts = current_domain.repository_for(Cart)
        cart = carts.get_for_user(command.user_id)

        cart.clear()
        carts.add(cart)

        logger.info("Cart cleared", user_id=str(command.user_id), cart_id=str(cart.id))
        return str(cart.id)
