import uuid
from unittest.mock import AsyncMock

import httpx
import pytest

from app.api.db.database import get_db
from app.api.utils.exceptions import ProductAlreadyExistsException, ProductNotFoundException
from app.api.v1.services.product import ProductService
from main import app
from tests.factories import make_product

NEW_PRODUCT = {
    "name": "Linen shirt",
    "description": "Relaxed fit linen shirt",
    "price": "129.99",
    "sku": "SHIRT-LIN-001",
    "stock": 12,
    "category": "Clothing",
    "is_active": True,
}


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


class TestListProducts:
    def test_third_page_of_twenty_five(self, client, monkeypatch):
        corpus = [make_product(i) for i in range(25, 0, -1)]
        list_products = AsyncMock(side_effect=lambda limit, offset, session: (corpus[offset:offset + limit], 25))
        monkeypatch.setattr(ProductService, "list_products", list_products)

        response = client.get("/api/v1/products/list", params={"page": 3, "pageSize": 10})

        assert response.status_code == 200
        body = response.json()
        assert list_products.await_args.kwargs["offset"] == 20
        assert list_products.await_args.kwargs["limit"] == 10
        assert len(body["data"]) == 5
        assert [item["sku"] for item in body["data"]] == [f"SKU-{i:04d}" for i in range(5, 0, -1)]
        assert body["pagination"] == {"page": 3, "pageSize": 10, "total": 25, "totalPages": 3}

    def test_defaults_to_first_page_of_ten(self, client, monkeypatch):
        list_products = AsyncMock(return_value=([], 0))
        monkeypatch.setattr(ProductService, "list_products", list_products)

        response = client.get("/api/v1/products/list")

        assert response.status_code == 200
        assert response.json() == {
            "data": [],
            "pagination": {"page": 1, "pageSize": 10, "total": 0, "totalPages": 0},
        }
        assert list_products.await_args.kwargs["offset"] == 0

    @pytest.mark.parametrize(
        "params",
        [{"page": 0}, {"pageSize": 101}, {"pageSize": 0}, {"page": -2}, {"page": "x"}],
    )
    def test_invalid_paging_is_rejected_before_query(self, client, monkeypatch, params):
        list_products = AsyncMock(return_value=([], 0))
        monkeypatch.setattr(ProductService, "list_products", list_products)

        response = client.get("/api/v1/products/list", params=params)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] is False
        assert body["detail"] == "INVALID_PAGINATION"
        assert body["errors"]
        list_products.assert_not_awaited()

    def test_datastore_failure_is_500(self, client, monkeypatch):
        monkeypatch.setattr(ProductService, "list_products", AsyncMock(side_effect=RuntimeError("db down")))

        response = client.get("/api/v1/products/list")

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch products"

    def test_failure_message_follows_locale(self, client, monkeypatch):
        monkeypatch.setattr(ProductService, "list_products", AsyncMock(side_effect=RuntimeError("db down")))

        response = client.get("/api/v1/products/list", headers={"Accept-Language": "pl-PL,pl;q=0.9"})

        assert response.json()["message"] == "Nie udało się pobrać produktów"


class TestCreateProduct:
    def test_admin_creates_product(self, client, monkeypatch, admin_token):
        product = make_product(1, sku=NEW_PRODUCT["sku"])
        create = AsyncMock(return_value=product)
        monkeypatch.setattr(ProductService, "create_product", create)

        response = client.post("/api/v1/products", json=NEW_PRODUCT, headers=auth_header(admin_token))

        assert response.status_code == 201
        assert response.json()["data"] == {"id": str(product.id), "sku": "SHIRT-LIN-001"}
        assert create.await_args.args[0].sku == "SHIRT-LIN-001"

    def test_customer_is_forbidden(self, client, monkeypatch, customer_token):
        create = AsyncMock()
        monkeypatch.setattr(ProductService, "create_product", create)

        response = client.post("/api/v1/products", json=NEW_PRODUCT, headers=auth_header(customer_token))

        assert response.status_code == 403
        assert response.json()["detail"] == "INSUFFICIENT_PERMISSIONS"
        create.assert_not_awaited()

    def test_anonymous_is_unauthorized(self, client):
        response = client.post("/api/v1/products", json=NEW_PRODUCT)

        assert response.status_code == 401
        assert response.json()["detail"] == "MISSING_AUTHORIZATION"

    def test_invalid_body_is_400(self, client, admin_token):
        response = client.post(
            "/api/v1/products",
            json={**NEW_PRODUCT, "price": "-1", "sku": ""},
            headers=auth_header(admin_token),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "VALIDATION_ERROR"
        assert any(error.startswith("price") for error in body["errors"])
        assert any(error.startswith("sku") for error in body["errors"])

    def test_duplicate_sku_is_409(self, client, monkeypatch, admin_token):
        monkeypatch.setattr(
            ProductService, "create_product", AsyncMock(side_effect=ProductAlreadyExistsException())
        )

        response = client.post("/api/v1/products", json=NEW_PRODUCT, headers=auth_header(admin_token))

        assert response.status_code == 409
        assert response.json()["detail"] == "DUPLICATE_SKU"

    def test_revoked_token_is_rejected(self, client, admin_token, revocation_store):
        from app.api.utils.auth_token import decode_jwt_token

        revocation_store.revoked[decode_jwt_token(admin_token)["jti"]] = 60

        response = client.post("/api/v1/products", json=NEW_PRODUCT, headers=auth_header(admin_token))

        assert response.status_code == 401
        assert response.json()["detail"] == "TOKEN_REVOKED"


class TestProductById:
    def test_get_product(self, client, monkeypatch):
        product = make_product(3, deleted=True)
        monkeypatch.setattr(ProductService, "get_product", AsyncMock(return_value=product))

        response = client.get(f"/api/v1/products/{product.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(product.id)
        assert data["deleted"] is True

    def test_unknown_product_is_404(self, client, monkeypatch):
        monkeypatch.setattr(ProductService, "get_product", AsyncMock(side_effect=ProductNotFoundException()))

        response = client.get(f"/api/v1/products/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "PRODUCT_NOT_FOUND"

    def test_admin_deletes_product(self, client, monkeypatch, admin_token):
        delete = AsyncMock()
        monkeypatch.setattr(ProductService, "delete_product", delete)
        product_id = str(uuid.uuid4())

        response = client.delete(f"/api/v1/products/{product_id}", headers=auth_header(admin_token))

        assert response.status_code == 200
        assert response.json()["data"] == {"product_id": product_id, "status": "deleted"}
        delete.assert_awaited_once()

    def test_customer_cannot_delete(self, client, monkeypatch, customer_token):
        delete = AsyncMock()
        monkeypatch.setattr(ProductService, "delete_product", delete)

        response = client.delete(f"/api/v1/products/{uuid.uuid4()}", headers=auth_header(customer_token))

        assert response.status_code == 403
        delete.assert_not_awaited()

    def test_delete_unknown_product_is_404(self, client, monkeypatch, admin_token):
        monkeypatch.setattr(ProductService, "delete_product", AsyncMock(side_effect=ProductNotFoundException()))

        response = client.delete(f"/api/v1/products/{uuid.uuid4()}", headers=auth_header(admin_token))

        assert response.status_code == 404


async def test_list_endpoint_against_database(db_session):
    """Full request through the real service and an in-memory database."""
    products = [make_product(i) for i in range(1, 26)]
    products.append(make_product(99, deleted=True))
    db_session.add_all(products)
    await db_session.commit()

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            response = await http.get("/api/v1/products/list", params={"page": 3, "pageSize": 10})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"page": 3, "pageSize": 10, "total": 25, "totalPages": 3}
    assert [item["name"] for item in body["data"]] == [f"Product {i}" for i in range(5, 0, -1)]
