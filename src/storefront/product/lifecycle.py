"""Product deactivation: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ProductLifecycleHandler:
    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_any(command.product_id)
        product.deactivate()
        repo.add(product)

        logger.info("Product deactivated", product_id=str(product.id))
        return str(product.id)
