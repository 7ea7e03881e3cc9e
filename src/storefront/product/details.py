"""Product details update: command and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Dict, Float, Identifier, List, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Dimensions, Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Partial update. Unset fields and empty lists leave the product unchanged;
    optional fields listed in ``cleared_fields`` are blanked."""

    product_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    price: Float()
    discount_price: Float()
    category: String(max_length=20)
    subcategory: String(max_length=100)
    brand: String(max_length=100)
    gender: String(max_length=10)
    sizes: List(content_type=dict)
    colors: List(content_type=dict)
    images: List(content_type=dict)
    material: String(max_length=200)
    care_instructions: Text()
    weight: Float()
    dimensions: Dict()
    tags: List(content_type=String(max_length=50))
    is_active: Boolean()
    is_featured: Boolean()
    cleared_fields: List(content_type=String(max_length=50))


@storefront.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_any(command.product_id)

        changed = product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            category=command.category,
            subcategory=command.subcategory,
            brand=command.brand,
            gender=command.gender,
            material=command.material,
            care_instructions=command.care_instructions,
            weight=command.weight,
            dimensions=Dimensions(**command.dimensions) if command.dimensions else None,
            tags=command.tags or None,
            is_active=command.is_active,
            is_featured=command.is_featured,
            sizes=command.sizes or None,
            colors=command.colors or None,
            images=command.images or None,
            cleared=command.cleared_fields,
        )
        repo.add(product)

        logger.info("Product updated", product_id=str(product.id), changed_fields=changed)
        return str(product.id)
