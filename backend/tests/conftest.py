"""
Shared fixtures for the API and unit tests.

The app runs against an in-memory SQLite database (one shared connection via
StaticPool); every test gets fresh tables, the starter catalog and a
customer plus an admin account.
"""
import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.users import User
from populate_db import seed
from models.product import Product
from utils.hashing import get_password_hash
from utils.tokenJWT import create_access_token

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

GUEST_SESSION = "guest-session-1"


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def catalog(db_session):
    """Starter products keyed by name -> product id."""
    seed(db_session)
    return {p.name: p.id for p in db_session.query(Product).all()}


@pytest.fixture
def test_client(db_session, catalog):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def _create_user(db_session, email: str, role: str) -> User:
    user = User(
        email=email,
        password_hash=get_password_hash("secret-password"),
        role=role,
        first_name="Test",
        last_name=role.title(),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def customer(db_session):
    return _create_user(db_session, "customer@example.com", "customer")


@pytest.fixture
def admin(db_session):
    return _create_user(db_session, "admin@example.com", "admin")


@pytest.fixture
def customer_headers(customer):
    token = create_access_token({"sub": customer.email, "role": customer.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin):
    token = create_access_token({"sub": admin.email, "role": admin.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def guest_headers():
    return {"X-Cart-Session": GUEST_SESSION}


@pytest.fixture
def measurements():
    return {
        "neck": 15.5,
        "chest": 40,
        "waist": 34,
        "shoulder": 18,
        "sleeve_length": 24,
        "shirt_length": 56,
    }
