"""Pytest fixtures for the storefront tests."""

import os
import tempfile
from decimal import Decimal

import pytest

# Point the application at a throw-away SQLite file before it is imported
_TMP_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["ORDER_RETRY_BACKOFF"] = "0.01"

from database import Base, SessionLocal, engine, init_db  # noqa: E402
from models.product import Product  # noqa: E402
from services import accounts, cart as cart_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email=None, password="secret123", name="Test User", role="customer"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@storefront.io"
        return accounts.register(db, email, password, name=name, role=role)

    return _make


@pytest.fixture
def make_product(db):
    def _make(name="Product", price="10.00", stock=10, category="Electronics",
              description=None, rating=0.0, image_url=None):
        product = Product(
            name=name, price=Decimal(price), stock=stock, category=category,
            description=description or f"{name} description", rating=rating, image_url=image_url,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def fill_cart(db):
    """Put (product, quantity) pairs into a user's cart."""
    def _fill(user, *lines):
        for product, quantity in lines:
            cart_service.add_line(db, user.id, product.id, quantity)

    return _fill


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def register(client):
    """Register through the API and return bearer headers for the new user."""
    counter = {"n": 0}

    def _register(email=None, password="secret123", name="Api User"):
        counter["n"] += 1
        email = email or f"api{counter['n']}@storefront.io"
        response = client.post("/auth/register", json={"email": email, "password": password, "name": name})
        assert response.status_code == 201, response.text
        token = response.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def admin_headers(client, make_user):
    make_user(email="admin@storefront.io", password="adminpass", role="admin")
    response = client.post("/auth/login", json={"email": "admin@storefront.io", "password": "adminpass"})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
