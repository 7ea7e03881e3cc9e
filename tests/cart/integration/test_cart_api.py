"""Integration tests for the cart endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.utils.globals import current_domain
from storefront.api import cart_router, product_router, register_error_handlers
from storefront.cart.cart import Cart
from storefront.product.lifecycle import DeactivateProduct

HEADERS = {"X-User-Id": "user-001"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(product_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def product_id(create_product):
    return create_product()


def _add(client, product_id, quantity=3, size="M", color="navy"):
    return client.post(
        "/cart/add",
        json={"productId": product_id, "quantity": quantity, "size": size, "color": color},
        headers=HEADERS,
    )


class TestAuthentication:
    def test_missing_user_header(self, client):
        response = client.get("/cart")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authorized, no user"}

    def test_blank_user_header(self, client):
        response = client.delete("/cart/clear", headers={"X-User-Id": "  "})
        assert response.status_code == 401


class TestViewCart:
    def test_no_cart_returns_empty_shell(self, client):
        response = client.get("/cart", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"items": [], "totalItems": 0, "totalPrice": 0}}

    def test_populated_cart(self, client, product_id):
        _add(client, product_id)
        body = client.get("/cart", headers=HEADERS).json()
        assert "message" not in body
        data = body["data"]
        assert data["userId"] == "user-001"
        assert data["totalItems"] == 3
        assert data["totalPrice"] == 240.0
        line = data["items"][0]
        assert line["productId"] == product_id
        assert line["product"]["name"] == "Oxford Shirt"
        assert line["product"]["images"][0]["isPrimary"] is True
        assert line["color"] == "Navy"
        assert line["price"] == 80.0

    def test_line_of_deactivated_product_is_still_shown(self, client, product_id):
        _add(client, product_id)
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        data = client.get("/cart", headers=HEADERS).json()["data"]
        assert data["items"][0]["product"]["name"] == "Oxford Shirt"
        assert data["totalPrice"] == 240.0


class TestAddToCart:
    def test_add(self, client, product_id):
        response = _add(client, product_id)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Item added to cart"
        assert body["data"]["totalItems"] == 3
        assert body["data"]["totalPrice"] == 240.0

    def test_add_over_stock_on_merge(self, client, product_id):
        _add(client, product_id)
        response = _add(client, product_id)
        assert response.status_code == 400
        assert response.json()["success"] is False

        cart = current_domain.repository_for(Cart).find_by_user("user-001")
        assert cart.total_items == 3

    def test_missing_fields(self, client, product_id):
        response = client.post("/cart/add", json={"productId": product_id, "quantity": 1}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json()["message"] == "Product ID, size, and color are required"

    def test_unknown_product(self, client):
        response = _add(client, "no-such-product")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found or inactive"}

    def test_unknown_size(self, client, product_id):
        response = _add(client, product_id, size="XL")
        assert response.status_code == 400
        assert response.json()["message"] == "Size not available"

    def test_unknown_color(self, client, product_id):
        response = _add(client, product_id, color="Red")
        assert response.status_code == 400
        assert response.json()["message"] == "Color not available"

    def test_malformed_body(self, client):
        response = client.post("/cart/add", json={"quantity": "many"}, headers=HEADERS)
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["field"] == "quantity"


class TestUpdateCartItem:
    def _item_id(self, client, product_id):
        return _add(client, product_id).json()["data"]["items"][0]["id"]

    def test_update(self, client, product_id):
        item_id = self._item_id(client, product_id)
        response = client.put("/cart/update", json={"itemId": item_id, "quantity": 5}, headers=HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Cart updated"
        assert body["data"]["totalPrice"] == 400.0

    def test_update_above_stock(self, client, product_id):
        item_id = self._item_id(client, product_id)
        response = client.put("/cart/update", json={"itemId": item_id, "quantity": 6}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient stock"

    def test_update_to_zero(self, client, product_id):
        item_id = self._item_id(client, product_id)
        response = client.put("/cart/update", json={"itemId": item_id, "quantity": 0}, headers=HEADERS)
        assert response.status_code == 400

    def test_update_without_cart(self, client):
        response = client.put("/cart/update", json={"itemId": "item-1", "quantity": 1}, headers=HEADERS)
        assert response.status_code == 404
        assert response.json()["message"] == "Cart not found"

    def test_update_unknown_item(self, client, product_id):
        self._item_id(client, product_id)
        response = client.put("/cart/update", json={"itemId": "missing", "quantity": 1}, headers=HEADERS)
        assert response.status_code == 404
        assert response.json()["message"] == "Item not found in cart"


class TestRemoveAndClear:
    def test_remove(self, client, product_id):
        item_id = _add(client, product_id).json()["data"]["items"][0]["id"]
        response = client.delete(f"/cart/remove/{item_id}", headers=HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item removed from cart"
        assert body["data"]["items"] == []
        assert body["data"]["totalPrice"] == 0

    def test_remove_unknown_item_is_ok(self, client, product_id):
        _add(client, product_id)
        response = client.delete("/cart/remove/missing", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["data"]["totalItems"] == 3

    def test_remove_without_cart(self, client):
        response = client.delete("/cart/remove/item-1", headers=HEADERS)
        assert response.status_code == 404

    def test_clear(self, client, product_id):
        _add(client, product_id)
        response = client.delete("/cart/clear", headers=HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Cart cleared"
        assert body["data"]["totalItems"] == 0

    def test_clear_without_cart(self, client):
        response = client.delete("/cart/clear", headers=HEADERS)
        assert response.status_code == 404


class TestRejectionStatuses:
    @pytest.mark.parametrize(
        ("overrides", "status", "message"),
        [
            ({"size": "XL"}, 400, "Size not available"),
            ({"color": "Red"}, 400, "Color not available"),
            ({"quantity": 6}, 400, "Insufficient stock"),
            ({"size": "L"}, 400, "Insufficient stock"),
            ({"quantity": 0}, 400, "Quantity must be at least 1"),
            ({"product_id": "nope"}, 404, "Product not found or inactive"),
        ],
    )
    def test_add_rejections(self, client, product_id, overrides, status, message):
        args = {"product_id": product_id, "quantity": 1, "size": "M", "color": "navy", **overrides}
        response = _add(client, **args)
        assert response.status_code == status
        assert response.json()["success"] is False
        assert response.json()["message"] == message
        assert client.get("/cart", headers=HEADERS).json()["data"]["totalItems"] == 0

    def test_update_rejections(self, client, product_id):
        no_cart = client.put("/cart/update", json={"itemId": "item-1", "quantity": 1}, headers=HEADERS)
        assert (no_cart.status_code, no_cart.json()["message"]) == (404, "Cart not found")

        _add(client, product_id, quantity=1)
        unknown = client.put("/cart/update", json={"itemId": "missing", "quantity": 1}, headers=HEADERS)
        assert (unknown.status_code, unknown.json()["message"]) == (404, "Item not found in cart")

    def test_conflict_that_survives_the_retry_is_409(self, client, product_id, monkeypatch):
        _add(client, product_id, quantity=1)
        _add(client, product_id, quantity=1)

        repo_cls = type(current_domain.repository_for(Cart))
        read_cart = repo_cls.find_by_user

        def stale_read(self, user_id):
            cart = read_cart(self, user_id)
            if cart is not None:
                cart._version -= 1
            return cart

        monkeypatch.setattr(repo_cls, "find_by_user", stale_read)
        response = client.delete("/cart/clear", headers=HEADERS)
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Cart was modified concurrently, please retry"}
