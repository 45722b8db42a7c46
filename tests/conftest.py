"""Pytest configuration and fixtures."""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from database import Base, make_engine, make_session_factory
import models  # noqa: F401
from schemas.category import CategoryCreate
from schemas.product import ProductCreate
from schemas.user import UserInsert
from storage import DatabaseStorage, get_storage
from utils.hashing import get_password_hash


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = make_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store(engine) -> DatabaseStorage:
    return DatabaseStorage(make_session_factory(engine))


@pytest.fixture
def make_user(store):
    counter = {"n": 0}

    def _make(username=None, email=None, role="user", password="secret123"):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        return store.create_user(UserInsert(
            username=username,
            email=email or f"{username}@example.com",
            password=get_password_hash(password),
            role=role,
        ))

    return _make


@pytest.fixture
def make_category(store):
    def _make(name="Books", slug=None):
        return store.create_category(CategoryCreate(name=name, slug=slug or name.lower()))

    return _make


@pytest.fixture
def make_product(store):
    counter = {"n": 0}

    def _make(name=None, price="10.00", **fields):
        counter["n"] += 1
        name = name or f"Product {counter['n']}"
        fields.setdefault("slug", f"product-{counter['n']}")
        fields.setdefault("stock", 10)
        return store.create_product(ProductCreate(name=name, price=Decimal(price), **fields))

    return _make


@pytest.fixture
def client(store):
    """FastAPI test client wired to the test database."""
    from main import app

    app.dependency_overrides[get_storage] = lambda: store
    # No context manager: the lifespan would create tables on the configured database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client, make_user):
    """Create an account and return bearer headers for it."""
    def _login(role="user", username=None):
        user = make_user(username=username, role=role, password="secret123")
        resp = client.post("/api/login", json={"username": user.username, "password": "secret123"})
        assert resp.status_code == 200, resp.text
        return user, {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login
