"""
Tests for router composition and the route groups.
"""

from uuid import uuid4

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from storefront.api.routes import ROUTE_MOUNTS, RouteMount, index, mount_routers, validate_mounts
from storefront.modules.catalog.domain.models import Product


class TestMountTable:
    def test_mount_order(self):
        assert [m.prefix for m in ROUTE_MOUNTS] == ["/admin", "/products", "/user", "/pages", "/"]

    def test_catch_all_must_be_last(self):
        router = APIRouter()
        with pytest.raises(ValueError, match="last"):
            validate_mounts([RouteMount("/", router, "index"), RouteMount("/user", router, "user")])

    def test_duplicate_prefix_rejected(self):
        router = APIRouter()
        with pytest.raises(ValueError, match="Duplicate"):
            validate_mounts([RouteMount("/user", router, "a"), RouteMount("/user", router, "b")])

    @pytest.mark.parametrize("prefix", ["user", "/user/"])
    def test_malformed_prefix_rejected(self, prefix):
        with pytest.raises(ValueError):
            validate_mounts([RouteMount(prefix, APIRouter(), "user")])

    def test_first_matching_prefix_wins(self):
        first, second = APIRouter(), APIRouter()

        @first.get("/thing")
        async def from_first():
            return {"router": "first"}

        @second.get("/shop/thing")
        async def from_second():
            return {"router": "second"}

        app = FastAPI()
        mount_routers(app, [RouteMount("/shop", first, "first"), RouteMount("/", second, "second")])

        assert TestClient(app).get("/shop/thing").json() == {"router": "first"}

    def test_catch_all_index_route_does_not_shadow_sections(self, build_app, monkeypatch):
        greedy_index = APIRouter()
        greedy_index.include_router(index.router)

        @greedy_index.get("/{rest:path}")
        async def anything(rest: str):
            return {"router": "index", "path": rest}

        mounts = ROUTE_MOUNTS[:-1] + (RouteMount("/", greedy_index, "index"),)
        monkeypatch.setattr("storefront.main.ROUTE_MOUNTS", mounts)
        client = TestClient(build_app())

        for path in ("/products", "/user/signin", "/pages/about-us"):
            response = client.get(path)
            assert response.status_code == 200
            assert "text/html" in response.headers["content-type"], path

        admin = client.get("/admin", follow_redirects=False)
        assert admin.status_code == 303
        assert admin.headers["location"] == "/user/signin"

        assert "Latest Products" in client.get("/").text
        assert client.get("/somewhere/else").json() == {"router": "index", "path": "somewhere/else"}


class TestCatalogRoutes:
    def test_home_lists_latest_products(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Latest Products" in response.text
        assert "Canvas Sneaker" in response.text

    def test_all_products(self, client):
        response = client.get("/products")

        assert response.status_code == 200
        assert "All Products" in response.text
        assert "$59.90" in response.text

    def test_category_page(self, client, sneaker, shoes):
        response = client.get("/products/shoes")

        assert response.status_code == 200
        assert f'href="/products/shoes/{sneaker.id}"' in response.text

    def test_empty_category(self, client):
        assert "No products found." in client.get("/products/bags").text

    def test_product_detail(self, client, sneaker):
        response = client.get(f"/products/shoes/{sneaker.id}")

        assert response.status_code == 200
        assert "Product code: SH-001" in response.text
        assert "By Acme" in response.text

    def test_product_detail_shows_breadcrumbs(self, client, sneaker):
        text = client.get(f"/products/shoes/{sneaker.id}").text
        assert '<ol class="breadcrumbs">' in text
        assert '<a href="/products/shoes">Shoes</a>' in text

    @pytest.mark.parametrize("product_id", ["not-a-uuid", str(uuid4())])
    def test_unknown_product_is_404(self, client, product_id):
        response = client.get(f"/products/shoes/{product_id}")

        assert response.status_code == 404
        assert "Product not found" in response.text

    def test_product_in_wrong_category_is_404(self, client, sneaker):
        assert client.get(f"/products/bags/{sneaker.id}").status_code == 404

    def test_home_limits_products(self, build_app, product_repository, shoes):
        product_repository.products.extend(
            Product(product_code=f"X-{i}", title=f"Extra {i}", price=1, category_id=shoes.id)
            for i in range(5)
        )
        client = TestClient(build_app(HOME_PRODUCTS_LIMIT=2))

        assert client.get("/").text.count('class="product-card"') == 2


class TestPages:
    @pytest.mark.parametrize(
        "path,heading",
        [
            ("/pages/about-us", "About Us"),
            ("/pages/shipping-policy", "Shipping Policy"),
            ("/pages/careers", "Careers"),
        ],
    )
    def test_static_pages(self, client, path, heading):
        response = client.get(path)

        assert response.status_code == 200
        assert heading in response.text


class TestUserRoutes:
    def test_signup_signs_in(self, client, user_repository):
        response = client.post(
            "/user/signup",
            data={"username": "dana", "email": "Dana@Example.com", "password": "s3cret"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/user/profile"
        created = next(u for u in user_repository.users.values() if u.username == "dana")
        assert created.email == "dana@example.com"
        assert created.password_hash != "s3cret"

        assert "dana@example.com" in client.get("/user/profile").text

    def test_signup_with_existing_email(self, client, user_repository):
        response = client.post(
            "/user/signup",
            data={"username": "other", "email": "casey@example.com", "password": "s3cret"},
        )

        assert response.status_code == 200
        assert "Email already in use" in response.text
        assert len(user_repository.users) == 2

    def test_signup_with_invalid_form(self, client):
        response = client.post(
            "/user/signup",
            data={"username": " ", "email": "nope", "password": "x"},
        )

        assert str(response.url).endswith("/user/signup")
        assert "Please enter a valid email address" in response.text
        assert "Please enter a password of at least 4 characters" in response.text
        assert "Please enter a username" in response.text

    def test_signin_redirects_to_profile(self, sign_in):
        response = sign_in("casey@example.com")

        assert response.status_code == 303
        assert response.headers["location"] == "/user/profile"

    def test_signin_returns_to_requested_page(self, client, sign_in):
        client.get("/admin", follow_redirects=False)
        response = sign_in("admin@example.com")

        assert response.headers["location"] == "/admin"

    def test_wrong_password(self, client, sign_in):
        response = sign_in("casey@example.com", "wrong")

        assert response.headers["location"] == "/user/signin"
        assert "Wrong email or password" in client.get("/user/signin").text

    def test_unknown_email(self, client, sign_in):
        sign_in("nobody@example.com")
        assert "Wrong email or password" in client.get("/user/signin").text

    def test_profile_requires_login(self, client):
        response = client.get("/user/profile", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/user/signin"
        assert "Please sign in to continue" in client.get("/user/signin").text

    def test_logout(self, client, sign_in):
        sign_in("casey@example.com")
        response = client.get("/user/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "Sign In" in client.get("/").text


class TestAdminRoutes:
    def test_anonymous_is_sent_to_signin(self, client):
        response = client.get("/admin", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/user/signin"

    def test_customer_is_forbidden(self, client, sign_in):
        sign_in("casey@example.com")
        response = client.get("/admin")

        assert response.status_code == 403
        assert "Admin privileges required for this page" in response.text

    def test_admin_sees_dashboard(self, client, sign_in):
        sign_in("admin@example.com")
        response = client.get("/admin")

        assert response.status_code == 200
        assert "1 product in 2 categories." in response.text
