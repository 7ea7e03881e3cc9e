"""Pydantic request/response schemas for the storefront API.

These are the external JSON contracts (camelCase on the wire), kept separate
from the internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class SizeStockSchema(CamelModel):
    size: str = Field(..., max_length=4)
    stock: int = Field(0, ge=0)


class ColorSchema(CamelModel):
    color: str = Field(..., min_length=1, max_length=50)
    color_code: str | None = Field(None, max_length=20)


class ImageSchema(CamelModel):
    url: str = Field(..., max_length=500)
    alt: str | None = Field(None, max_length=255)
    is_primary: bool = False


class DimensionsSchema(CamelModel):
    length: float | None = Field(None, ge=0)
    width: float | None = Field(None, ge=0)
    height: float | None = Field(None, ge=0)


class ReviewSchema(CamelModel):
    id: str
    user_id: str
    rating: int
    comment: str | None = None
    reviewed_at: datetime | None = None


class PaginationSchema(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"productId": "3f7c1a2e-1b8e-4c55-9d0f-0d1f6a3b9e21", "quantity": 2, "size": "M", "color": "navy"}]
        }
    }

    product_id: str | None = None
    quantity: int = 1
    size: str | None = None
    color: str | None = None


class UpdateCartItemRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"itemId": "c0a8e1f4-7d2b-4e0a-9a51-5b7e1c3d2f10", "quantity": 3}]}}

    item_id: str | None = None
    quantity: int | None = None


class CartProductSchema(CamelModel):
    id: str
    name: str
    price: float
    images: list[ImageSchema] = []
    brand: str
    category: str


class CartItemSchema(CamelModel):
    id: str
    product: CartProductSchema | None = None
    product_id: str
    quantity: int
    size: str
    color: str
    price: float


class CartSchema(CamelModel):
    id: str | None = None
    user_id: str | None = None
    items: list[CartItemSchema] = []
    total_items: int = 0
    total_price: float = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: CartSchema


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "sku": "SHIRT-OXF-001",
                    "name": "Oxford Shirt",
                    "description": "Classic cotton oxford shirt",
                    "price": 100.0,
                    "discountPrice": 80.0,
                    "category": "shirts",
                    "brand": "Acme",
                    "gender": "men",
                    "sizes": [{"size": "M", "stock": 5}],
                    "colors": [{"color": "Navy", "colorCode": "#000080"}],
                    "images": [{"url": "https://cdn.example.com/oxford.jpg", "alt": "Front", "isPrimary": True}],
                    "tags": ["cotton", "office"],
                }
            ]
        }
    }

    sku: str = Field(..., min_length=3, max_length=50)
    name: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    discount_price: float | None = Field(None, gt=0)
    category: str
    subcategory: str | None = Field(None, max_length=100)
    brand: str = Field(..., min_length=1, max_length=100)
    gender: str
    sizes: list[SizeStockSchema] = []
    colors: list[ColorSchema] = []
    images: list[ImageSchema] = []
    material: str | None = Field(None, max_length=200)
    care_instructions: str | None = None
    weight: float | None = Field(None, ge=0)
    dimensions: DimensionsSchema | None = None
    tags: list[str] = []
    is_featured: bool = False


class UpdateProductRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 90.0, "isFeatured": True}]}}

    name: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    discount_price: float | None = Field(None, gt=0)
    category: str | None = None
    subcategory: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    gender: str | None = None
    sizes: list[SizeStockSchema] | None = None
    colors: list[ColorSchema] | None = None
    images: list[ImageSchema] | None = None
    material: str | None = Field(None, max_length=200)
    care_instructions: str | None = None
    weight: float | None = Field(None, ge=0)
    dimensions: DimensionsSchema | None = None
    tags: list[str] | None = None
    is_active: bool | None = None
    is_featured: bool | None = None

    def cleared_fields(self) -> list[str]:
        """Optional fields the client explicitly sent as null."""
        return [
            name
            for name in ("discount_price", "subcategory", "material", "care_instructions", "weight", "dimensions")
            if name in self.model_fields_set and getattr(self, name) is None
        ]


class AdjustStockRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"size": "M", "delta": -2}]}}

    size: str = Field(..., max_length=4)
    delta: int


class SubmitReviewRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"rating": 5, "comment": "Fits perfectly"}]}}

    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None


class ProductSummarySchema(CamelModel):
    """A product as shown in listings: everything except its reviews."""

    id: str
    sku: str
    name: str
    description: str
    price: float
    discount_price: float | None = None
    final_price: float
    category: str
    subcategory: str | None = None
    brand: str
    gender: str
    sizes: list[SizeStockSchema] = []
    colors: list[ColorSchema] = []
    images: list[ImageSchema] = []
    material: str | None = None
    care_instructions: str | None = None
    weight: float | None = None
    dimensions: DimensionsSchema | None = None
    is_active: bool
    is_featured: bool
    tags: list[str] = []
    rating_average: float = 0.0
    rating_count: int = 0
    total_stock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("sku", mode="before")
    @classmethod
    def sku_code(cls, value):
        return getattr(value, "code", value)

    @field_validator("final_price", mode="before")
    @classmethod
    def call_final_price(cls, value):
        return value() if callable(value) else value

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value):
        return str(value)


class ProductSchema(ProductSummarySchema):
    reviews: list[ReviewSchema] = []


class ProductResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: ProductSchema


class ProductListResponse(CamelModel):
    success: bool = True
    data: list[ProductSummarySchema]
    pagination: PaginationSchema


class StockResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: dict


class StatusResponse(CamelModel):
    success: bool = True
    message: str | None = None
