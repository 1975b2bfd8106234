"""
Pytest configuration and fixtures for ElectroMart tests.
"""

import sys
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from electromart.api.main import create_app
from electromart.api.dependencies import (
    Settings,
    init_database,
    create_tables,
    init_services,
)
from electromart.security import get_password_hash
from electromart.storage import (
    Base,
    Brand,
    Category,
    Product,
    User,
    Order,
    build_entity_specs,
    generate_id,
)


# =============================================================================
# Test Settings
# =============================================================================

def get_test_settings(**overrides) -> Settings:
    """Return settings configured for testing."""
    values = dict(
        database_url="sqlite:///:memory:",
        database_echo=False,
        secret_key="test-secret",
        environment="test",
        debug=True,
    )
    values.update(overrides)
    return Settings(**values)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def engine():
    """Create an in-memory database engine for tests."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(test_engine)

    yield test_engine

    test_engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Provide database session for tests."""
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    session = session_factory()

    yield session

    session.rollback()
    session.close()


@pytest.fixture
def entity_specs():
    """Entity spec registry with password hashing enabled."""
    return build_entity_specs(hash_password=get_password_hash)


# =============================================================================
# Seed Data Fixtures
# =============================================================================

@pytest.fixture
def brand(db_session) -> Brand:
    record = Brand(id=generate_id(), name="Acme", description="Consumer electronics")
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def category(db_session) -> Category:
    record = Category(id=generate_id(), name="Laptops", description="Portable computers")
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def product(db_session, brand, category) -> Product:
    record = Product(
        id=generate_id(),
        name="Laptop Pro",
        description="14 inch, 16GB RAM",
        price=999.0,
        stock_quantity=5,
        brand_id=brand.id,
        category_id=category.id,
    )
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def user(db_session) -> User:
    record = User(
        id=generate_id(),
        first_name="Ada",
        last_name="Lovelace",
        username="ada",
        password=get_password_hash("Secur3!pass"),
        email="ada@example.com",
        address="12 Analytical Row",
        role="regular",
    )
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def order(db_session, user) -> Order:
    record = Order(
        id=generate_id(),
        user_id=user.id,
        order_date="2024-03-01",
        total_amount=1998.0,
        status="pending",
    )
    db_session.add(record)
    db_session.commit()
    return record


# =============================================================================
# Application Fixtures
# =============================================================================

def _build_app(settings: Settings):
    # ASGITransport does not run the lifespan, so wire the store up here
    init_database(settings)
    create_tables()
    init_services(settings)
    return create_app(settings)


@pytest.fixture(scope="function")
def app():
    """Create FastAPI application backed by a fresh in-memory database."""
    return _build_app(get_test_settings())


@pytest.fixture(scope="function")
def collecting_app():
    """Application that reports every failing field, not just the first."""
    return _build_app(get_test_settings(collect_all_errors=True))


@pytest_asyncio.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def collecting_client(collecting_app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=collecting_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Payload Fixtures
# =============================================================================

@pytest.fixture
def sample_user_data() -> dict:
    """Valid user payload."""
    return {
        "first_name": "Grace",
        "last_name": "Hopper",
        "username": "grace",
        "password": "C0bol!rocks",
        "email": "grace@example.com",
        "address": "1 Harvard Yard",
        "mobile": "0791234567",
    }


@pytest.fixture
def sample_brand_data() -> dict:
    return {"name": "Acme", "description": "Consumer electronics"}


@pytest.fixture
def sample_category_data() -> dict:
    return {"name": "Laptops", "description": "Portable computers"}
