"""Catalog browsing: criteria, ordering and pagination for product listings."""

import math
from dataclasses import dataclass, field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12


def _created(product):
    created = product.created_at
    return created.timestamp() if created else 0.0


# sort name -> (key function, descending)
SORTS = {
    "price_asc": (lambda p: p.price, False),
    "price_desc": (lambda p: p.price, True),
    "name_asc": (lambda p: p.name.lower(), False),
    "name_desc": (lambda p: p.name.lower(), True),
    "rating": (lambda p: p.rating_average or 0.0, True),
    "newest": (_created, True),
}
DEFAULT_SORT = "newest"


@dataclass(frozen=True)
class ProductCriteria:
    """What a shopper asked to see. Empty values mean "no filter"."""

    query: str | None = None
    category: str | None = None
    gender: str | None = None
    brand: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    size: str | None = None
    color: str | None = None
    sort: str = DEFAULT_SORT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def matches(self, product) -> bool:
        """Checks that need the product's children (sizes, colors, tags)."""
        if self.size and not product.offers_size(self.size):
            return False
        if self.color and not product.offers_color_like(self.color):
            return False
        if self.query and not matches_text(product, self.query):
            return False
        return True


@dataclass(frozen=True)
class ProductPage:
    items: list = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total: int = 0

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def pagination(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


def matches_text(product, query: str) -> bool:
    """Case-insensitive match of every query term against name, description or tags."""
    haystack = " ".join([product.name or "", product.description or "", *(product.tags or [])]).lower()
    return all(term in haystack for term in query.lower().split())


def sort_products(products, sort: str | None):
    key, descending = SORTS.get(sort or DEFAULT_SORT, SORTS[DEFAULT_SORT])
    return sorted(products, key=key, reverse=descending)


def paginate(products, page: int, limit: int) -> ProductPage:
    page = max(page or DEFAULT_PAGE, 1)
    limit = max(limit or DEFAULT_LIMIT, 1)
    start = (page - 1) * limit
    return ProductPage(items=products[start : start + limit], page=page, limit=limit, total=len(products))
