"""Storefront bounded context: product catalog and per-user shopping carts.

Carts read the catalog synchronously while validating additions, so both
aggregates live in the same domain and share one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

storefront = Domain(name="storefront")
