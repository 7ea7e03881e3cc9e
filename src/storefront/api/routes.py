"""FastAPI routes for the storefront: the shopper's cart and the product catalog."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.deps import current_user_id
from storefront.api.schemas import (
    AddToCartRequest,
    AdjustStockRequest,
    CartResponse,
    CartSchema,
    CreateProductRequest,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductSummarySchema,
    StatusResponse,
    StockResponse,
    SubmitReviewRequest,
    UpdateCartItemRequest,
    UpdateProductRequest,
)
from storefront.cart.concurrency import process_cart_command
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from storefront.cart.management import ClearCart
from storefront.cart.view import cart_for_user
from storefront.product.creation import CreateProduct
from storefront.product.details import UpdateProduct
from storefront.product.lifecycle import DeactivateProduct
from storefront.product.listing import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_SORT, ProductCriteria
from storefront.product.product import Product
from storefront.product.reviews import SubmitReview
from storefront.product.stock import AdjustStock

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(user_id, message=None) -> CartResponse:
    data = CartSchema.model_validate(cart_for_user(user_id))
    if message is None:
        return CartResponse(success=True, data=data)
    return CartResponse(success=True, message=message, data=data)


@cart_router.get("", response_model=CartResponse, response_model_exclude_unset=True)
async def view_cart(user_id: str = Depends(current_user_id)) -> CartResponse:
    return _cart_response(user_id)


@cart_router.post("/add", response_model=CartResponse, response_model_exclude_unset=True)
async def add_to_cart(body: AddToCartRequest, user_id: str = Depends(current_user_id)) -> CartResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
        size=body.size,
        color=body.color,
    )
    process_cart_command(command)
    return _cart_response(user_id, "Item added to cart")


@cart_router.put("/update", response_model=CartResponse, response_model_exclude_unset=True)
async def update_cart_item(body: UpdateCartItemRequest, user_id: str = Depends(current_user_id)) -> CartResponse:
    command = UpdateCartItem(
        user_id=user_id,
        item_id=body.item_id,
        quantity=body.quantity,
    )
    process_cart_command(command)
    return _cart_response(user_id, "Cart updated")


@cart_router.delete("/remove/{item_id}", response_model=CartResponse, response_model_exclude_unset=True)
async def remove_from_cart(item_id: str, user_id: str = Depends(current_user_id)) -> CartResponse:
    process_cart_command(RemoveFromCart(user_id=user_id, item_id=item_id))
    return _cart_response(user_id, "Item removed from cart")


@cart_router.delete("/clear", response_model=CartResponse, response_model_exclude_unset=True)
async def clear_cart(user_id: str = Depends(current_user_id)) -> CartResponse:
    process_cart_command(ClearCart(user_id=user_id))
    return _cart_response(user_id, "Cart cleared")


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


def _browse(criteria: ProductCriteria) -> ProductListResponse:
    page = current_domain.repository_for(Product).browse(criteria)
    return ProductListResponse(
        success=True,
        data=[ProductSummarySchema.model_validate(p) for p in page.items],
        pagination=page.pagination,
    )


def _product_response(product_id, message=None) -> ProductResponse:
    product = current_domain.repository_for(Product).find_any(product_id)
    return ProductResponse(success=True, message=message, data=ProductSchema.model_validate(product))


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
    category: str | None = None,
    gender: str | None = None,
    brand: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    size: str | None = None,
    color: str | None = None,
    sort: str = DEFAULT_SORT,
) -> ProductListResponse:
    criteria = ProductCriteria(
        category=category,
        gender=gender,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        size=size,
        color=color,
        sort=sort,
        page=page,
        limit=limit,
    )
    return _browse(criteria)


@product_router.get("/search", response_model=ProductListResponse)
async def search_products(
    query: str | None = None,
    category: str | None = None,
    gender: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
) -> ProductListResponse:
    criteria = ProductCriteria(
        query=query,
        category=category,
        gender=gender,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )
    return _browse(criteria)


@product_router.get("/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(product_id)


@product_router.post("", status_code=201, response_model=ProductResponse, response_model_exclude_none=True)
async def create_product(body: CreateProductRequest, user_id: str = Depends(current_user_id)) -> ProductResponse:
    command = CreateProduct(
        sku=body.sku,
        name=body.name,
        description=body.description,
        price=body.price,
        discount_price=body.discount_price,
        category=body.category,
        subcategory=body.subcategory,
        brand=body.brand,
        gender=body.gender,
        sizes=[s.model_dump() for s in body.sizes],
        colors=[c.model_dump() for c in body.colors],
        images=[i.model_dump() for i in body.images],
        material=body.material,
        care_instructions=body.care_instructions,
        weight=body.weight,
        dimensions=body.dimensions.model_dump() if body.dimensions else {},
        tags=body.tags,
        is_featured=body.is_featured,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product_response(product_id, "Product created")


@product_router.put("/{product_id}", response_model=ProductResponse, response_model_exclude_none=True)
async def update_product(
    product_id: str, body: UpdateProductRequest, user_id: str = Depends(current_user_id)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        discount_price=body.discount_price,
        category=body.category,
        subcategory=body.subcategory,
        brand=body.brand,
        gender=body.gender,
        sizes=[s.model_dump() for s in body.sizes or []],
        colors=[c.model_dump() for c in body.colors or []],
        images=[i.model_dump() for i in body.images or []],
        material=body.material,
        care_instructions=body.care_instructions,
        weight=body.weight,
        dimensions=body.dimensions.model_dump() if body.dimensions else {},
        tags=body.tags or [],
        is_active=body.is_active,
        is_featured=body.is_featured,
        cleared_fields=body.cleared_fields(),
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(product_id, "Product updated")


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def deactivate_product(product_id: str, user_id: str = Depends(current_user_id)) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(success=True, message="Product deactivated")


@product_router.put("/{product_id}/stock", response_model=StockResponse)
async def adjust_stock(
    product_id: str, body: AdjustStockRequest, user_id: str = Depends(current_user_id)
) -> StockResponse:
    command = AdjustStock(product_id=product_id, size=body.size, delta=body.delta)
    stock = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).find_any(product_id)
    return StockResponse(
        success=True,
        message="Stock updated",
        data={"size": body.size, "stock": stock, "totalStock": product.total_stock},
    )


@product_router.post("/{product_id}/reviews", status_code=201, response_model=StatusResponse)
async def submit_review(
    product_id: str, body: SubmitReviewRequest, user_id: str = Depends(current_user_id)
) -> StatusResponse:
    command = SubmitReview(
        product_id=product_id,
        user_id=user_id,
        rating=body.rating,
        comment=body.comment,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(success=True, message="Review added successfully")
