"""Repository for the Product aggregate: lookups used by carts and catalog browsing."""

from storefront.domain import storefront
from storefront.product.listing import ProductCriteria, ProductPage, paginate, sort_products
from storefront.product.product import Product
from storefront.shared.errors import ProductNotFound, ProductUnavailable
from storefront.shared.sku import SKU


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_available(self, product_id) -> Product:
        """Load a product for cart purposes; inactive products count as missing."""
        product = self.get_or_none(product_id) if product_id else None
        if product is None or not product.is_active:
            raise ProductUnavailable()
        return product

    def find_any(self, product_id) -> Product:
        """Load a product whether or not it is active."""
        product = self.get_or_none(product_id) if product_id else None
        if product is None:
            raise ProductNotFound()
        return product

    def find_many(self, product_ids) -> dict:
        """Products keyed by id; missing ids are simply absent from the result."""
        ids = list({str(pid) for pid in product_ids})
        if not ids:
            return {}
        found = self._dao.query.filter(id__in=ids).limit(None).all().items
        return {str(p.id): p for p in found}

    def sku_taken(self, sku) -> bool:
        code = SKU.from_text(sku).code if isinstance(sku, str) else sku.code
        return self._dao.query.filter(sku_code=code).all().first is not None

    def browse(self, criteria: ProductCriteria) -> ProductPage:
        """Active products matching ``criteria``, sorted and cut to the requested page."""
        query = self._dao.query.filter(is_active=True)
        if criteria.category:
            query = query.filter(category=criteria.category)
        if criteria.gender:
            query = query.filter(gender=criteria.gender)
        if criteria.brand:
            query = query.filter(brand__icontains=criteria.brand)
        if criteria.min_price is not None:
            query = query.filter(price__gte=criteria.min_price)
        if criteria.max_price is not None:
            query = query.filter(price__lte=criteria.max_price)

        candidates = [p for p in query.limit(None).all().items if criteria.matches(p)]
        return paginate(sort_products(candidates, criteria.sort), criteria.page, criteria.limit)
