"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, List, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    sku: String(required=True)
    name: String(required=True)
    price: Float(required=True)
    final_price: Float(required=True)
    total_stock: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: List(content_type=String)


@storefront.event(part_of="Product")
class ProductStockAdjusted:
    """A size's stock count moved; ``new_stock`` is already clamped at zero."""

    __version__ = 1

    product_id: Identifier(required=True)
    size: String(required=True)
    delta: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    total_stock: Integer(required=True)


@storefront.event(part_of="Product")
class ProductReviewed:
    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True)
    rating_average: Float(required=True)
    rating_count: Integer(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """The product was withdrawn from sale; it stays readable by id."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
