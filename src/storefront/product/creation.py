"""Product creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Dict, Float, List, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Dimensions, Product
from storefront.shared.errors import DuplicateSku

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    sku: String(required=True, max_length=50)
    name: String(required=True, max_length=100)
    description: Text(required=True)
    price: Float(required=True)
    discount_price: Float()
    category: String(required=True, max_length=20)
    subcategory: String(max_length=100)
    brand: String(required=True, max_length=100)
    gender: String(required=True, max_length=10)
    sizes: List(content_type=dict)  # [{"size": "M", "stock": 5}]
    colors: List(content_type=dict)  # [{"color": "Navy", "color_code": "#000080"}]
    images: List(content_type=dict)  # [{"url": ..., "alt": ..., "is_primary": bool}]
    material: String(max_length=200)
    care_instructions: Text()
    weight: Float()
    dimensions: Dict()  # {"length": ..., "width": ..., "height": ...}
    tags: List(content_type=String(max_length=50))
    is_featured: Boolean(default=False)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo.sku_taken(command.sku):
            logger.info("Product creation rejected", reason="duplicate_sku", sku=command.sku)
            raise DuplicateSku()

        product = Product.create(
            sku=command.sku,
            name=command.name,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            category=command.category,
            subcategory=command.subcategory,
            brand=command.brand,
            gender=command.gender,
            sizes=command.sizes,
            colors=command.colors,
            images=command.images,
            material=command.material,
            care_instructions=command.care_instructions,
            weight=command.weight,
            dimensions=Dimensions(**command.dimensions) if command.dimensions else None,
            tags=command.tags,
            is_featured=command.is_featured,
        )
        repo.add(product)

        logger.info("Product created", product_id=str(product.id), sku=product.sku.code)
        return str(product.id)
