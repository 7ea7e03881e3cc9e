"""Read side of the cart: the persisted cart joined with product display fields.

Reads never re-validate line items against the catalog; they only decorate
them with the product's current name, price, images, brand and category.
"""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.product.product import Product


def empty_cart() -> dict:
    return {"items": [], "total_items": 0, "total_price": 0}


def _product_summary(product) -> dict | None:
    if product is None:
        return None
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "images": [{"url": i.url, "alt": i.alt, "is_primary": i.is_primary} for i in product.images],
        "brand": product.brand,
        "category": product.category,
    }


def populate(cart: Cart) -> dict:
    """Cart as a plain dict with each line's ``product`` resolved (``None`` when deleted)."""
    products = current_domain.repository_for(Product).find_many(i.product_id for i in cart.items)
    return {
        "id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": [
            {
                "id": str(item.id),
                "product": _product_summary(products.get(str(item.product_id))),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "size": item.size,
                "color": item.color,
                "price": item.price,
            }
            for item in cart.items
        ],
        "total_items": cart.total_items,
        "total_price": cart.total_price,
        "created_at": cart.created_at,
        "updated_at": cart.updated_at,
    }


def cart_for_user(user_id) -> dict:
    """The user's populated cart, or the zero-valued shell when they have none yet."""
    cart = current_domain.repository_for(Cart).find_by_user(user_id)
    if cart is None:
        return empty_cart()
    return populate(cart)
