"""Product aggregate: the catalog record a cart validates against.

Holds list and discount pricing, per-size stock, the offered colors, images
and customer reviews with their rating aggregate.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    List,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.shared.errors import AlreadyReviewed, ColorUnavailable, SizeUnavailable
from storefront.shared.sku import SKU


class ProductCategory(Enum):
    SHIRTS = "shirts"
    PANTS = "pants"
    DRESSES = "dresses"
    JACKETS = "jackets"
    SHOES = "shoes"
    ACCESSORIES = "accessories"
    UNDERWEAR = "underwear"
    SPORTSWEAR = "sportswear"
    FORMAL = "formal"
    CASUAL = "casual"


class Gender(Enum):
    MEN = "men"
    WOMEN = "women"
    UNISEX = "unisex"
    KIDS = "kids"


class Size(Enum):
    """Apparel letter sizes, shoe sizes 6-12 and waist sizes 28-42."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"
    SHOE_6 = "6"
    SHOE_7 = "7"
    SHOE_8 = "8"
    SHOE_9 = "9"
    SHOE_10 = "10"
    SHOE_11 = "11"
    SHOE_12 = "12"
    WAIST_28 = "28"
    WAIST_30 = "30"
    WAIST_32 = "32"
    WAIST_34 = "34"
    WAIST_36 = "36"
    WAIST_38 = "38"
    WAIST_40 = "40"
    WAIST_42 = "42"


@storefront.value_object(part_of="Product")
class Dimensions:
    length: Float(min_value=0.0)
    width: Float(min_value=0.0)
    height: Float(min_value=0.0)


@storefront.entity(part_of="Product")
class SizeStock:
    """Units on hand for one size of a product."""

    size: String(required=True, max_length=4, choices=Size)
    stock: Integer(min_value=0, default=0)


@storefront.entity(part_of="Product")
class ProductColor:
    color: String(required=True, max_length=50)
    color_code: String(max_length=20)


@storefront.entity(part_of="Product")
class ProductImage:
    url: String(required=True, max_length=500)
    alt: String(max_length=255)
    is_primary: Boolean(default=False)


@storefront.entity(part_of="Product")
class Review:
    user_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()
    reviewed_at: DateTime()


def _size_entries(sizes):
    return [SizeStock(size=s["size"], stock=s.get("stock", 0)) for s in sizes or []]


def _color_entries(colors):
    return [ProductColor(color=c["color"].strip(), color_code=c.get("color_code")) for c in colors or []]


def _image_entries(images):
    """Build image entities; the first image is primary unless another one is flagged."""
    entries = [
        ProductImage(url=i["url"], alt=i.get("alt"), is_primary=bool(i.get("is_primary", False)))
        for i in images or []
    ]
    if entries and not any(e.is_primary for e in entries):
        entries[0].is_primary = True
    return entries


# Descriptive fields an admin may overwrite in a partial update
_SIMPLE_FIELDS = (
    "name",
    "description",
    "price",
    "discount_price",
    "category",
    "subcategory",
    "brand",
    "gender",
    "material",
    "care_instructions",
    "weight",
    "dimensions",
    "tags",
    "is_active",
    "is_featured",
)

# Optional fields an admin may blank out again
_CLEARABLE_FIELDS = (
    "discount_price",
    "subcategory",
    "material",
    "care_instructions",
    "weight",
    "dimensions",
)


@storefront.aggregate
class Product:
    """Product aggregate root."""

    sku: ValueObject(SKU, required=True)
    name: String(required=True, min_length=2, max_length=100)
    description: Text(required=True)
    price: Float(required=True, min_value=0.01)
    discount_price: Float(min_value=0.01)
    category: String(required=True, max_length=20, choices=ProductCategory)
    subcategory: String(max_length=100)
    brand: String(required=True, max_length=100)
    gender: String(required=True, max_length=10, choices=Gender)
    sizes: HasMany(SizeStock)
    colors: HasMany(ProductColor)
    images: HasMany(ProductImage)
    material: String(max_length=200)
    care_instructions: Text()
    weight: Float(min_value=0.0)
    dimensions: ValueObject(Dimensions)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    tags: List(content_type=String(max_length=50))
    rating_average: Float(min_value=0.0, max_value=5.0, default=0.0)
    rating_count: Integer(min_value=0, default=0)
    reviews: HasMany(Review)
    total_stock: Integer(min_value=0, default=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def one_stock_entry_per_size(self):
        sizes = [s.size for s in self.sizes]
        if len(sizes) != len(set(sizes)):
            raise ValidationError({"sizes": ["Each size may only be listed once"]})

    @invariant.post
    def exactly_one_primary_image_when_images_exist(self):
        if not self.images:
            return
        if len([i for i in self.images if i.is_primary]) != 1:
            raise ValidationError({"images": ["Exactly one image must be marked as primary"]})

    @invariant.post
    def one_review_per_user(self):
        reviewers = [str(r.user_id) for r in self.reviews]
        if len(reviewers) != len(set(reviewers)):
            raise ValidationError({"reviews": ["A user may review a product only once"]})

    @classmethod
    def create(
        cls,
        sku,
        name,
        description,
        price,
        category,
        brand,
        gender,
        discount_price=None,
        subcategory=None,
        sizes=None,
        colors=None,
        images=None,
        material=None,
        care_instructions=None,
        weight=None,
        dimensions=None,
        tags=None,
        is_featured=False,
    ):
        from storefront.product.events import ProductCreated

        sku_vo = SKU.from_text(sku) if isinstance(sku, str) else sku
        size_entries = _size_entries(sizes)
        now = datetime.now(UTC)

        product = cls(
            sku=sku_vo,
            name=name,
            description=description,
            price=price,
            discount_price=discount_price,
            category=category,
            subcategory=subcategory,
            brand=brand,
            gender=gender,
            sizes=size_entries,
            colors=_color_entries(colors),
            images=_image_entries(images),
            material=material,
            care_instructions=care_instructions,
            weight=weight,
            dimensions=dimensions,
            tags=tags or [],
            is_featured=is_featured,
            total_stock=sum(s.stock for s in size_entries),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                sku=sku_vo.code,
                name=name,
                price=price,
                final_price=product.final_price(),
                total_stock=product.total_stock,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Stock & pricing accessors
    # -------------------------------------------------------------------
    def final_price(self):
        """The price actually charged: the discount price only when it undercuts the list price."""
        if self.discount_price and self.discount_price < self.price:
            return self.discount_price
        return self.price

    def find_size(self, size):
        """Return the stock entry for ``size`` (exact match)."""
        entry = next((s for s in self.sizes if s.size == size), None)
        if entry is None:
            raise SizeUnavailable()
        return entry

    def find_color(self, color):
        """Return the catalog's canonical spelling of ``color`` (case-insensitive match)."""
        wanted = (color or "").strip().lower()
        entry = next((c for c in self.colors if c.color.lower() == wanted), None)
        if entry is None:
            raise ColorUnavailable()
        return entry.color

    def is_in_stock(self, size=None):
        if size is not None:
            entry = next((s for s in self.sizes if s.size == size), None)
            return entry is not None and entry.stock > 0
        return self.total_stock > 0

    def offers_size(self, size):
        return any(s.size == size for s in self.sizes)

    def offers_color_like(self, fragment):
        fragment = fragment.lower()
        return any(fragment in c.color.lower() for c in self.colors)

    def _recompute_total_stock(self):
        self.total_stock = sum(s.stock for s in self.sizes)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def adjust_stock(self, size, delta):
        """Move a size's stock by ``delta``, never below zero. Returns the new count."""
        from storefront.product.events import ProductStockAdjusted

        entry = self.find_size(size)
        previous = entry.stock
        entry.stock = max(0, previous + delta)
        self._recompute_total_stock()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductStockAdjusted(
                product_id=self.id,
                size=size,
                delta=delta,
                previous_stock=previous,
                new_stock=entry.stock,
                total_stock=self.total_stock,
            )
        )
        return entry.stock

    def record_review(self, user_id, rating, comment=None):
        """Append a review and refresh the rating aggregate in the same change."""
        from storefront.product.events import ProductReviewed

        if any(str(r.user_id) == str(user_id) for r in self.reviews):
            raise AlreadyReviewed()

        now = datetime.now(UTC)
        review = Review(user_id=user_id, rating=rating, comment=comment, reviewed_at=now)

        with atomic_change(self):
            self.add_reviews(review)
            ratings = [r.rating for r in self.reviews]
            self.rating_count = len(ratings)
            self.rating_average = sum(ratings) / len(ratings)
            self.updated_at = now

        self.raise_(
            ProductReviewed(
                product_id=self.id,
                review_id=review.id,
                user_id=str(user_id),
                rating=rating,
                rating_average=self.rating_average,
                rating_count=self.rating_count,
            )
        )
        return review

    def update_details(self, sizes=None, colors=None, images=None, cleared=(), **changes):
        """Partially update the record. ``None`` means "leave unchanged".

        Optional fields named in ``cleared`` are reset to empty instead.
        """
        from storefront.product.events import ProductDetailsUpdated

        unknown = set(changes) - set(_SIMPLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})
        not_clearable = set(cleared) - set(_CLEARABLE_FIELDS)
        if not_clearable:
            raise ValidationError({field: ["Field cannot be cleared"] for field in sorted(not_clearable)})

        changed = []
        with atomic_change(self):
            for field in _SIMPLE_FIELDS:
                value = changes.get(field)
                if value is not None:
                    setattr(self, field, value)
                    changed.append(field)
            for field in cleared:
                if getattr(self, field) is not None:
                    setattr(self, field, None)
                    changed.append(field)

            if sizes is not None:
                self._replace("sizes", _size_entries(sizes))
                self._recompute_total_stock()
                changed.append("sizes")
            if colors is not None:
                self._replace("colors", _color_entries(colors))
                changed.append("colors")
            if images is not None:
                self._replace("images", _image_entries(images))
                changed.append("images")

        if not changed:
            return changed

        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDetailsUpdated(product_id=self.id, changed_fields=changed))
        return changed

    def _replace(self, association, entries):
        current = list(getattr(self, association))
        if current:
            getattr(self, f"remove_{association}")(current)
        if entries:
            getattr(self, f"add_{association}")(entries)

    def deactivate(self):
        """Hide the product from listings, search and carts. Idempotent."""
        from storefront.product.events import ProductDeactivated

        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=now))
