import uuid
from unittest.mock import AsyncMock

import pytest

from app.api.utils.auth_token import decode_jwt_token
from app.api.utils.exceptions import InvalidCredentialsException, ProductNotFoundException
from app.api.v1.models.user import UserRole
from app.api.v1.services.auth import AuthService
from app.api.v1.services.product import ProductService
from tests.factories import make_product, make_user


@pytest.fixture()
def products(monkeypatch):
    corpus = [make_product(i) for i in range(12, 0, -1)]
    list_products = AsyncMock(side_effect=lambda limit, offset, session: (corpus[offset:offset + limit], len(corpus)))
    monkeypatch.setattr(ProductService, "list_products", list_products)
    return list_products


class TestGuard:
    def test_anonymous_is_sent_to_login(self, client):
        response = client.get("/en/cms/products?page=2", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/en/cms/login?next=/en/cms/products%3Fpage%3D2"

    def test_customer_is_sent_to_storefront(self, client, customer_token):
        client.cookies.set("session_token", customer_token)

        response = client.get("/pl/cms/products", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/pl"

    def test_invalid_cookie_is_sent_to_login(self, client):
        client.cookies.set("session_token", "garbage")

        response = client.get("/en/cms/products", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/en/cms/login")

    def test_unsupported_locale_is_404(self, client, admin_token):
        client.cookies.set("session_token", admin_token)

        assert client.get("/de/cms/products", follow_redirects=False).status_code == 404

    def test_storefront_home(self, client):
        response = client.get("/en")
        assert response.status_code == 200
        assert "Storefront" in response.text


class TestProductsPage:
    def test_admin_sees_first_page(self, client, admin_token, products):
        client.cookies.set("session_token", admin_token)

        response = client.get("/en/cms/products")

        assert response.status_code == 200
        assert "Product 12" in response.text
        assert "Product 3" in response.text
        assert "Product 2<" not in response.text
        assert "Page 1 of 2" in " ".join(response.text.split())
        assert products.await_args.kwargs["limit"] == 10
        assert products.await_args.kwargs["offset"] == 0

    def test_bearer_token_is_accepted(self, client, admin_token, products):
        response = client.get("/en/cms/products", headers={"Authorization": f"Bearer {admin_token}"})
        assert response.status_code == 200

    def test_second_page_in_polish(self, client, admin_token, products):
        client.cookies.set("session_token", admin_token)

        response = client.get("/pl/cms/products", params={"page": 2, "pageSize": 10})

        assert response.status_code == 200
        assert "Product 2" in response.text
        assert "Strona 2 z 2" in " ".join(response.text.split())
        assert products.await_args.kwargs["offset"] == 10

    @pytest.mark.parametrize("params", [{"page": 0}, {"pageSize": 500}, {"page": "abc"}])
    def test_invalid_paging_falls_back_to_defaults(self, client, admin_token, products, params):
        client.cookies.set("session_token", admin_token)

        response = client.get("/en/cms/products", params=params)

        assert response.status_code == 200
        assert products.await_args.kwargs["offset"] == 0
        assert products.await_args.kwargs["limit"] == 10

    def test_page_past_the_end_keeps_pagination(self, client, admin_token, products):
        client.cookies.set("session_token", admin_token)

        response = client.get("/en/cms/products", params={"page": 5, "pageSize": 10})

        assert response.status_code == 200
        text = " ".join(response.text.split())
        assert "No data available" in text
        assert 'class="pagination"' in text
        assert "Page 5 of 2" in text
        assert '?page=2&pageSize=10' in text
        assert "Items per page" in text
        assert products.await_args.kwargs["offset"] == 40

    def test_empty_catalog(self, client, admin_token, monkeypatch):
        monkeypatch.setattr(ProductService, "list_products", AsyncMock(return_value=([], 0)))
        client.cookies.set("session_token", admin_token)

        response = client.get("/en/cms/products")

        assert response.status_code == 200
        assert "No data available" in response.text
        assert "Items per page" not in response.text

    def test_datastore_failure_is_shown(self, client, admin_token, monkeypatch):
        monkeypatch.setattr(ProductService, "list_products", AsyncMock(side_effect=RuntimeError("db down")))
        client.cookies.set("session_token", admin_token)

        response = client.get("/en/cms/products")

        assert response.status_code == 500
        assert "Failed to fetch products" in response.text

    def test_product_detail(self, client, admin_token, monkeypatch):
        product = make_product(7, description="Hand made")
        monkeypatch.setattr(ProductService, "get_product", AsyncMock(return_value=product))
        client.cookies.set("session_token", admin_token)

        response = client.get(f"/en/cms/products/{product.id}")

        assert response.status_code == 200
        assert "Hand made" in response.text
        assert "SKU-0007" in response.text

    def test_missing_product_detail(self, client, admin_token, monkeypatch):
        monkeypatch.setattr(ProductService, "get_product", AsyncMock(side_effect=ProductNotFoundException()))
        client.cookies.set("session_token", admin_token)

        response = client.get(f"/en/cms/products/{uuid.uuid4()}")

        assert response.status_code == 404
        assert "Product not found" in response.text


class TestLogin:
    def test_login_page_renders(self, client):
        response = client.get("/pl/cms/login")
        assert response.status_code == 200
        assert "Logowanie do CMS" in response.text

    def test_admin_login_sets_cookie(self, client, monkeypatch):
        admin = make_user(role=UserRole.ADMIN, email="admin@example.com")
        monkeypatch.setattr(AuthService, "authenticate", AsyncMock(return_value=admin))

        response = client.post(
            "/en/cms/login",
            data={"email": "admin@example.com", "password": "Password123", "next": "/en/cms/products?page=2"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/en/cms/products?page=2"
        token = response.cookies.get("session_token")
        assert decode_jwt_token(token)["role"] == "admin"

    def test_next_outside_cms_is_ignored(self, client, monkeypatch):
        admin = make_user(role=UserRole.ADMIN)
        monkeypatch.setattr(AuthService, "authenticate", AsyncMock(return_value=admin))

        response = client.post(
            "/en/cms/login",
            data={"email": admin.email, "password": "Password123", "next": "https://evil.example.com/"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/en/cms/products"

    def test_bad_credentials_rerender_form(self, client, monkeypatch):
        monkeypatch.setattr(AuthService, "authenticate", AsyncMock(side_effect=InvalidCredentialsException()))

        response = client.post("/en/cms/login", data={"email": "a@example.com", "password": "x"})

        assert response.status_code == 401
        assert "Invalid email or password" in response.text
        assert "session_token" not in response.cookies

    def test_customer_cannot_log_in(self, client, monkeypatch):
        monkeypatch.setattr(AuthService, "authenticate", AsyncMock(return_value=make_user()))

        response = client.post("/en/cms/login", data={"email": "c@example.com", "password": "Password123"})

        assert response.status_code == 403

    def test_logout_revokes_session(self, client, admin_token, revocation_store):
        client.cookies.set("session_token", admin_token)

        response = client.get("/en/cms/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/en/cms/login"
        assert decode_jwt_token(admin_token)["jti"] in revocation_store.revoked
