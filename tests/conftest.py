# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Fixtures shared by the storefront tests.
#
# Key features:
# - Sets required environment variables before any storefront import
# - In-memory session store and repositories (no Redis or database needed)
# - An application built with those collaborators, without running the lifespan
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# storefront.main builds an application (and loads settings) at import time

os.environ.setdefault("SESSION_SECRET", "test-session-secret-value")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "console")

import time  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any, Dict, List, Optional, Sequence  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from storefront.main import create_application  # noqa: E402
from storefront.modules.accounts.domain.models import User  # noqa: E402
from storefront.modules.accounts.domain.repositories import UserRepository  # noqa: E402
from storefront.modules.catalog.domain.models import Category, Product  # noqa: E402
from storefront.modules.catalog.domain.repositories import (  # noqa: E402
    CategoryRepository,
    ProductRepository,
)
from storefront.shared.config.settings import Settings  # noqa: E402
from storefront.shared.core.exceptions import DuplicateResourceError  # noqa: E402
from storefront.shared.core.security import get_password_hash  # noqa: E402
from storefront.shared.infrastructure.session_store import SessionStore  # noqa: E402

TEST_SECRET = "test-session-secret-value"
USER_PASSWORD = "correct-horse"


# =============================================================================
# Test doubles
# =============================================================================

class InMemorySessionStore(SessionStore):
    """Session store keeping data and absolute expiry times in a dict."""

    def __init__(self):
        self.data: Dict[str, Dict[str, Any]] = {}
        self.expires: Dict[str, float] = {}
        self.ttls: Dict[str, int] = {}
        self.loads = 0
        self.saves = 0
        self.destroyed: List[str] = []

    def _alive(self, session_id: str) -> bool:
        expires = self.expires.get(session_id)
        if expires is None or expires <= time.time():
            self.data.pop(session_id, None)
            self.expires.pop(session_id, None)
            return False
        return True

    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        self.loads += 1
        if not self._alive(session_id):
            return None
        return dict(self.data[session_id])

    async def save(self, session_id: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        self.saves += 1
        if ttl is not None:
            self.data[session_id] = dict(data)
            self.expires[session_id] = time.time() + ttl
            self.ttls[session_id] = ttl
            return True
        if not self._alive(session_id):
            return False
        self.data[session_id] = dict(data)
        return True

    async def destroy(self, session_id: str) -> None:
        self.destroyed.append(session_id)
        self.data.pop(session_id, None)
        self.expires.pop(session_id, None)


class InMemoryCategoryRepository(CategoryRepository):
    def __init__(self, categories: Sequence[Category] = (), error: Optional[Exception] = None):
        self.categories = list(categories)
        self.error = error
        self.calls = 0

    async def list_by_title(self) -> Sequence[Category]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return sorted(self.categories, key=lambda c: c.title)

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        return next((c for c in self.categories if c.slug == slug), None)


class InMemoryProductRepository(ProductRepository):
    def __init__(self, products: Sequence[Product] = ()):
        self.products = list(products)

    async def list_all(self) -> Sequence[Product]:
        return list(self.products)

    async def list_latest(self, limit: int) -> Sequence[Product]:
        return sorted(self.products, key=lambda p: p.created_at, reverse=True)[:limit]

    async def list_by_category(self, category_id: UUID) -> Sequence[Product]:
        return [p for p in self.products if p.category_id == category_id]

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Sequence[User] = ()):
        self.users = {user.id: user for user in users}

    async def create(self, user: User) -> User:
        if await self.get_by_email(user.email) is not None:
            raise DuplicateResourceError("Email already in use", resource_type="user", field="email")
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email.lower()), None)


# =============================================================================
# Fixtures
# =============================================================================

def make_settings(**overrides) -> Settings:
    values = {"SESSION_SECRET": TEST_SECRET, "ENVIRONMENT": "test", "LOG_FORMAT": "console"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def shoes() -> Category:
    return Category(title="Shoes", slug="shoes")


@pytest.fixture
def bags() -> Category:
    return Category(title="Bags", slug="bags")


@pytest.fixture
def sneaker(shoes: Category) -> Product:
    return Product(
        product_code="SH-001",
        title="Canvas Sneaker",
        price=Decimal("59.90"),
        category_id=shoes.id,
        description="Low-top canvas sneaker.",
        manufacturer="Acme",
    )


@pytest.fixture
def category_repository(shoes: Category, bags: Category) -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository([shoes, bags])


@pytest.fixture
def failing_category_repository() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository(error=ConnectionError("database unreachable"))


@pytest.fixture
def product_repository(sneaker: Product) -> InMemoryProductRepository:
    return InMemoryProductRepository([sneaker])


@pytest.fixture
def customer() -> User:
    return User(
        username="casey",
        email="casey@example.com",
        password_hash=get_password_hash(USER_PASSWORD),
    )


@pytest.fixture
def admin_user() -> User:
    return User(
        username="root",
        email="admin@example.com",
        password_hash=get_password_hash(USER_PASSWORD),
        is_admin=True,
    )


@pytest.fixture
def user_repository(customer: User, admin_user: User) -> InMemoryUserRepository:
    return InMemoryUserRepository([customer, admin_user])


@pytest.fixture
def repositories(category_repository, product_repository, user_repository) -> Dict[str, Any]:
    return {
        "category_repository": category_repository,
        "product_repository": product_repository,
        "user_repository": user_repository,
    }


@pytest.fixture
def build_app(session_store, repositories):
    """Build an application with test doubles; settings and repositories can be overridden."""

    def _build(**overrides):
        repos = dict(repositories)
        for name in list(overrides):
            if name.endswith("_repository"):
                repos[name] = overrides.pop(name)
        return create_application(
            make_settings(**overrides),
            session_store=session_store,
            repositories=repos,
        )

    return _build


@pytest.fixture
def app(settings, session_store, repositories):
    return create_application(settings, session_store=session_store, repositories=repositories)


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client; server errors come back as responses instead of being raised."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def sign_in(client: TestClient):
    """Post the sign-in form; returns the (unfollowed) redirect response."""

    def _sign_in(email: str, password: str = USER_PASSWORD):
        return client.post(
            "/user/signin",
            data={"email": email, "password": password},
            follow_redirects=False,
        )

    return _sign_in
