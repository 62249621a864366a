"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Point the application engine at SQLite before any app module is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from menu_api.main import app
from menu_api.models import Base, Category, Store, User, UserStoreRole
from menu_api.services import DbStoreAuthorizer, MenuItemService
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Users seeded by seed_roles, by role in store 1
OWNER_ID = 1
ADMIN_ID = 2
STAFF_ID = 3
OUTSIDER_ID = 4


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


@pytest.fixture
def seed_stores(db_session):
    """Create two stores: 1 (under test) and 2 (someone else's)."""
    stores = [
        Store(id=1, name="Curry House"),
        Store(id=2, name="Noodle Bar"),
    ]
    db_session.add_all(stores)
    db_session.commit()
    return stores


@pytest.fixture
def seed_store(seed_stores):
    return seed_stores[0]


@pytest.fixture
def other_store(seed_stores):
    return seed_stores[1]


@pytest.fixture
def seed_roles(db_session, seed_stores):
    """
    Users and their roles.

    Store 1: OWNER_ID is OWNER, ADMIN_ID is ADMIN, STAFF_ID is STAFF.
    Store 2: OUTSIDER_ID is OWNER.
    """
    db_session.add_all([
        User(id=OWNER_ID, email="owner@test.com", display_name="Owner"),
        User(id=ADMIN_ID, email="admin@test.com", display_name="Admin"),
        User(id=STAFF_ID, email="staff@test.com", display_name="Staff"),
        User(id=OUTSIDER_ID, email="outsider@test.com", display_name="Outsider"),
    ])
    db_session.flush()
    db_session.add_all([
        UserStoreRole(user_id=OWNER_ID, store_id=1, role=Roles.OWNER),
        UserStoreRole(user_id=ADMIN_ID, store_id=1, role=Roles.ADMIN),
        UserStoreRole(user_id=STAFF_ID, store_id=1, role=Roles.STAFF),
        UserStoreRole(user_id=OUTSIDER_ID, store_id=2, role=Roles.OWNER),
    ])
    db_session.commit()


@pytest.fixture
def seed_category(db_session, seed_store):
    """Existing category "Curry" at position 0 of store 1."""
    category = Category(store_id=seed_store.id, name="Curry", sort_order=0)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def menu_service(db_session, seed_roles):
    """MenuItemService backed by the seeded role table."""
    return MenuItemService(db_session, DbStoreAuthorizer(db_session))


def make_auth_headers(user_id: int) -> dict[str, str]:
    token = sign_jwt({"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers(seed_roles):
    """Authentication headers for the store 1 owner."""
    return make_auth_headers(OWNER_ID)


@pytest.fixture
def staff_headers(seed_roles):
    """Authentication headers for a STAFF member of store 1."""
    return make_auth_headers(STAFF_ID)


@pytest.fixture
def outsider_headers(seed_roles):
    """Authentication headers for the owner of store 2."""
    return make_auth_headers(OUTSIDER_ID)
