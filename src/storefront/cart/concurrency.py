"""Dispatching cart commands under optimistic concurrency.

Every cart write carries the aggregate version it was read at. When a
concurrent write got there first, the framework re-runs the handler once
from a fresh read (``[server.version_retry]`` in ``domain.toml``); a
conflict that survives the retry is reported as ``CartConflict``.
"""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from storefront.shared.errors import CartConflict

logger = structlog.get_logger(__name__)


def process_cart_command(command):
    try:
        return current_domain.process(command, asynchronous=False)
    except ExpectedVersionError as exc:
        logger.warning(
            "Cart write lost a version race after retry",
            command=command.__class__.__name__,
            user_id=str(getattr(command, "user_id", "")),
            error=str(exc),
        )
        raise CartConflict() from exc
