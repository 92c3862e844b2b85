"""Pytest configuration and shared fixtures."""

import os

# Must be set before app modules are imported: settings and engine read them once
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["SEED_DEMO_ACCOUNTS"] = "false"

from collections.abc import Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app import models  # noqa: E402, F401
from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.engine import engine  # noqa: E402
from app.db.session import SessionLocal, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.provider import InsuranceProvider  # noqa: E402
from app.models.section import Section  # noqa: E402
from app.models.user import User  # noqa: E402
from tests.helpers.seed import (  # noqa: E402
    create_test_admin,
    create_test_agent,
    create_test_portal_user,
    create_test_provider,
    create_test_section,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client sharing the test session with the app."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token(
        user_id=str(user.id),
        role=user.role,
        insurance_provider_id=user.insurance_provider_id,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    return auth_headers_for


@pytest.fixture
def provider(db: Session) -> InsuranceProvider:
    return create_test_provider(db, provider_id="acme-health", name="Acme Health")


@pytest.fixture
def section(db: Session, provider: InsuranceProvider) -> Section:
    return create_test_section(db, provider, title="Personal Details")


@pytest.fixture
def test_admin_user(db: Session) -> User:
    return create_test_admin(db)


@pytest.fixture
def test_agent_user(db: Session, provider: InsuranceProvider) -> User:
    return create_test_agent(db, provider)


@pytest.fixture
def test_portal_user(db: Session) -> User:
    return create_test_portal_user(db)


@pytest.fixture
def admin_headers(test_admin_user: User) -> dict[str, str]:
    return auth_headers_for(test_admin_user)


@pytest.fixture
def agent_headers(test_agent_user: User) -> dict[str, str]:
    return auth_headers_for(test_agent_user)


@pytest.fixture
def user_headers(test_portal_user: User) -> dict[str, str]:
    return auth_headers_for(test_portal_user)
