"""The JSON error envelope produced by the API's exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ExpectedVersionError, InvalidOperationError, ValidationError
from storefront.api import register_error_handlers
from storefront.cart import concurrency
from storefront.cart.management import ClearCart
from storefront.shared.errors import CartConflict, ProductUnavailable


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/version-conflict")
    async def version_conflict():
        raise ExpectedVersionError("Wrong expected version: 3 (Aggregate: Cart, Version: 4)")

    @app.get("/cart-conflict")
    async def cart_conflict():
        raise CartConflict()

    @app.get("/invalid-operation")
    async def invalid_operation():
        raise InvalidOperationError("Not allowed")

    @app.get("/field-errors")
    async def field_errors():
        raise ValidationError({"name": ["is required"]})

    @app.get("/not-found")
    async def not_found():
        raise ProductUnavailable()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorEnvelope:
    def test_version_conflict_is_409(self, client):
        response = client.get("/version-conflict")
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Cart was modified concurrently, please retry"}

    def test_cart_conflict_is_409(self, client):
        response = client.get("/cart-conflict")
        assert response.status_code == 409
        assert response.json()["message"] == CartConflict.message

    def test_invalid_operation_is_422(self, client):
        response = client.get("/invalid-operation")
        assert response.status_code == 422
        assert response.json()["message"] == "Not allowed"

    def test_plain_validation_error_keeps_field_messages(self, client):
        response = client.get("/field-errors")
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Validation failed",
            "errors": {"name": ["is required"]},
        }

    def test_not_found_is_404(self, client):
        response = client.get("/not-found")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found or inactive"

    def test_unhandled_error_is_500_without_details(self, client):
        response = client.get("/boom")
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Server error"}


class TestCartConflictTranslation:
    def test_version_conflict_after_retry_becomes_cart_conflict(self, monkeypatch):
        class LosingDomain:
            def process(self, command, asynchronous=True):
                raise ExpectedVersionError("Wrong expected version")

        monkeypatch.setattr(concurrency, "current_domain", LosingDomain())
        with pytest.raises(CartConflict) as exc:
            concurrency.process_cart_command(ClearCart(user_id="user-001"))
        assert isinstance(exc.value.__cause__, ExpectedVersionError)
