"""Product reviews: command and handler.

One review per user per product; the rating aggregate is refreshed in the
same write as the appended review.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import AlreadyReviewed

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class SubmitReview:
    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()


@storefront.command_handler(part_of=Product)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_any(command.product_id)

        try:
            review = product.record_review(command.user_id, command.rating, command.comment)
        except AlreadyReviewed:
            logger.info(
                "Review rejected",
                reason="already_reviewed",
                product_id=str(product.id),
                user_id=str(command.user_id),
            )
            raise

        repo.add(product)

        logger.info(
            "Review recorded",
            product_id=str(product.id),
            rating=command.rating,
            rating_average=product.rating_average,
        )
        return str(review.id)
