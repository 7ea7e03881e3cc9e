"""Stock adjustment: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AdjustStock:
    """Move one size's stock by ``delta`` (negative to take units out)."""

    product_id: Identifier(required=True)
    size: String(required=True, max_length=4)
    delta: Integer(required=True)


@storefront.command_handler(part_of=Product)
class AdjustStockHandler:
    @handle(AdjustStock)
    def adjust_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_any(command.product_id)
        new_stock = product.adjust_stock(command.size, command.delta)
        repo.add(product)

        logger.info(
            "Stock adjusted",
            product_id=str(product.id),
            size=command.size,
            delta=command.delta,
            stock=new_stock,
            total_stock=product.total_stock,
        )
        return new_stock
