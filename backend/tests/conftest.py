"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from menu_api.main import app
from menu_api.models import (
    Base,
    Category,
    Product,
    ProductMetric,
    Restaurant,
    RestaurantSettings,
    User,
)
from shared.infrastructure.db import create_db_engine, get_db
from shared.security.password import hash_password


# SQLite in-memory database for testing (StaticPool, foreign keys on)
engine = create_db_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


OWNER_EMAIL = "owner@test.com"
OWNER_PASSWORD = "ownerpass123"
OTHER_EMAIL = "other@test.com"
OTHER_PASSWORD = "otherpass123"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _login(client, email: str, password: str) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_owner(db_session):
    """Create the restaurant owner used by most tests."""
    user = User(
        name="Test Owner",
        email=OWNER_EMAIL,
        password=hash_password(OWNER_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_other_user(db_session):
    """Create a second user who owns nothing of the owner's."""
    user = User(
        name="Other User",
        email=OTHER_EMAIL,
        password=hash_password(OTHER_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(client, seed_owner):
    """Authentication headers for the owner."""
    return _login(client, OWNER_EMAIL, OWNER_PASSWORD)


@pytest.fixture
def other_auth_headers(client, seed_other_user):
    """Authentication headers for the other user."""
    return _login(client, OTHER_EMAIL, OTHER_PASSWORD)


@pytest.fixture
def seed_restaurant(db_session, seed_owner):
    """Create a restaurant with default settings for the owner."""
    restaurant = Restaurant(
        user_id=seed_owner.id,
        name="Pizza Place",
        slug="pizza-place",
        address="123 Test St",
        phone="+1234567890",
        settings=RestaurantSettings(),
    )
    db_session.add(restaurant)
    db_session.commit()
    db_session.refresh(restaurant)
    return restaurant


@pytest.fixture
def seed_category(db_session, seed_restaurant):
    """Create a test category - shared fixture for all tests."""
    category = Category(
        restaurant_id=seed_restaurant.id,
        name="Mains",
        order_index=0,
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_product(db_session, seed_restaurant, seed_category):
    """Create a test product with its zeroed metric row."""
    product = Product(
        restaurant_id=seed_restaurant.id,
        category_id=seed_category.id,
        name="Margherita",
        description="Tomato and mozzarella",
        price=10,
        metric=ProductMetric(restaurant_id=seed_restaurant.id),
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def product_factory(db_session, seed_restaurant, seed_category):
    """Create extra products; metric_values preset the counters."""

    def make_product(name: str, price=5, restaurant=None, category=None, **metric_values):
        restaurant = restaurant or seed_restaurant
        category = category or seed_category
        product = Product(
            restaurant_id=restaurant.id,
            category_id=category.id,
            name=name,
            price=price,
            metric=ProductMetric(restaurant_id=restaurant.id, **metric_values),
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return make_product
