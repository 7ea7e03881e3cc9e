"""Repository for the Cart aggregate, looked up by owning user."""

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.shared.errors import CartNotFound


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_by_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def get_for_user(self, user_id) -> Cart:
        """The user's cart; fails with ``CartNotFound`` when none was ever created."""
        cart = self.find_by_user(user_id)
        if cart is None:
            raise CartNotFound()
        return cart

    def get_or_create(self, user_id) -> Cart:
        """The user's cart, or a fresh empty one that is not persisted until first saved."""
        return self.find_by_user(user_id) or Cart.create(user_id=user_id)
