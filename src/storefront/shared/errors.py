"""Business error taxonomy for the storefront.

Every error carries a client-facing ``message``. Each family also extends the
Protean exception the HTTP layer already maps to a status code:

* ``InvalidInputError``, ``AvailabilityError`` and ``DuplicateError`` are
  ``ValidationError`` subclasses (400).
* ``NotFoundError`` is an ``ObjectNotFoundError`` subclass (404).
* ``CartConflict`` is an ``InvalidStateError`` subclass (409).
"""

from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError


class StorefrontError(Exception):
    """Root of every business error; lets callers catch the whole taxonomy."""

    message = "Request could not be completed"


class InvalidInputError(StorefrontError, ValidationError):
    """Request data is missing or malformed."""

    field = "request"
    message = "Invalid request"

    def __init__(self, message=None, field=None, **kwargs):
        self.message = message or self.message
        self.field = field or self.field
        super().__init__({self.field: [self.message]}, **kwargs)


class InvalidQuantity(InvalidInputError):
    field = "quantity"
    message = "Item ID and valid quantity are required"


class AvailabilityError(InvalidInputError):
    """The catalog cannot satisfy the requested product option."""


class SizeUnavailable(AvailabilityError):
    field = "size"
    message = "Size not available"


class ColorUnavailable(AvailabilityError):
    field = "color"
    message = "Color not available"


class InsufficientStock(AvailabilityError):
    field = "quantity"
    message = "Insufficient stock"


class DuplicateError(InvalidInputError):
    """The operation would create a second copy of something unique."""


class AlreadyReviewed(DuplicateError):
    field = "review"
    message = "Product already reviewed"


class DuplicateSku(DuplicateError):
    field = "sku"
    message = "A product with this SKU already exists"


class NotFoundError(StorefrontError, ObjectNotFoundError):
    """A referenced resource does not exist, or is not visible to the caller."""

    message = "Not found"

    def __init__(self, message=None, **kwargs):
        self.message = message or self.message
        super().__init__(self.message, **kwargs)


class ProductUnavailable(NotFoundError):
    message = "Product not found or inactive"


class ProductNotFound(NotFoundError):
    message = "Product not found"


class CartNotFound(NotFoundError):
    message = "Cart not found"


class ItemNotFound(NotFoundError):
    message = "Item not found in cart"


class CartConflict(StorefrontError, InvalidStateError):
    """The cart changed concurrently and the retry lost the race as well."""

    message = "Cart was modified concurrently, please retry"

    def __init__(self, message=None, **kwargs):
        self.message = message or self.message
        super().__init__(self.message, **kwargs)
