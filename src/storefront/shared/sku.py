"""SKU value object for stock keeping unit codes."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_SKU_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


@storefront.value_object
class SKU:
    """Stock keeping unit code, unique across the catalog.

    Alphanumerics and hyphens, 3-50 chars, e.g. "SHIRT-OXF-001".
    Codes are compared case-insensitively, so they are stored upper-cased.
    """

    code: String(required=True, max_length=50, min_length=3)

    @classmethod
    def from_text(cls, text):
        return cls(code=text.strip().upper())

    @invariant.post
    def code_must_be_valid_format(self):
        code = self.code

        if not _SKU_PATTERN.match(code):
            raise ValidationError({"sku": ["SKU must contain only alphanumeric characters and hyphens"]})

        if code.startswith("-") or code.endswith("-") or "--" in code:
            raise ValidationError({"sku": ["SKU hyphens must separate alphanumeric groups"]})
