"""
Shared pytest fixtures for Planner Suite API tests.

Provides:
- Isolated file-backed SQLite database per test (sync session for seeding,
  async session factory for the app)
- Fresh in-process counter store per test
- FastAPI TestClient with dependency overrides
- Tenant/user/role fixtures and bearer token helpers
"""

import os
import tempfile
from pathlib import Path

# Settings are read at import time - point everything at a scratch directory
_TEST_DIR = Path(tempfile.mkdtemp(prefix="planner-suite-tests-"))
os.environ.setdefault("PLANNER_LOG_TO_FILE", "false")
os.environ.setdefault("PLANNER_LOG_LEVEL", "WARNING")
os.environ.setdefault("PLANNER_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("PLANNER_CONFIG_PATH", str(_TEST_DIR / "config.yaml"))
os.environ.setdefault("PLANNER_DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DIR / 'app.db'}")
os.environ.setdefault("PLANNER_CREATE_SCHEMA_ON_STARTUP", "false")
os.environ.pop("PLANNER_REDIS_URL", None)

from collections.abc import Generator  # noqa: E402
from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from planner_api.database import Base, get_session_factory  # noqa: E402
from planner_api.dependencies import get_counter_store, get_token_codec  # noqa: E402
from planner_api.main import app  # noqa: E402
from planner_api.models import ModuleType, Organization, Tenant, User  # noqa: E402
from planner_api.services import CounterStore  # noqa: E402

from tests.fixtures.factories import (  # noqa: E402
    STAGE_PERMISSIONS,
    DEFAULT_PASSWORD,
    activate_module,
    assign_role,
    create_organization,
    create_role,
    create_tenant,
    create_user,
)


# ============================================
# Database Fixtures
# ============================================


@pytest.fixture(scope="function")
def db_path(tmp_path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture(scope="function")
def test_engine(db_path):
    """
    Create an isolated SQLite database engine for each test.

    Uses a file-based database in tmp_path so the sync seeding session and
    the app's async sessions see the same data.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    return engine


@pytest.fixture(scope="function")
def test_db(test_engine) -> Generator[Session, None, None]:
    """
    Create database tables and provide a sync session for seeding.

    Tables are created before and dropped after.
    """
    # Import all models to ensure they're registered with Base.metadata
    from planner_api.models import planning, role, tenant, user  # noqa: F401

    Base.metadata.create_all(bind=test_engine)

    TestingSessionLocal = sessionmaker(bind=test_engine, expire_on_commit=False)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_db, db_path) -> async_sessionmaker[AsyncSession]:
    """Async session factory bound to the same test database file"""
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
def counter_store() -> CounterStore:
    """In-process counter store, fresh for every test"""
    return CounterStore()


@pytest.fixture(scope="function")
def client(session_factory, counter_store) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient with the credential and counter stores overridden.
    """
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_counter_store] = lambda: counter_store

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================
# Tenant & User Fixtures
# ============================================


@pytest.fixture
def acme_tenant(test_db: Session) -> Tenant:
    """ACTIVE tenant 'acme' with a subscription valid for 30 more days"""
    return create_tenant(
        db=test_db,
        subdomain="acme",
        subscription_end_date=datetime.utcnow() + timedelta(days=30),
    )


@pytest.fixture
def acme_org(test_db: Session, acme_tenant: Tenant) -> Organization:
    return create_organization(db=test_db, tenant=acme_tenant, name="Acme Events")


@pytest.fixture
def stage_module(test_db: Session, acme_tenant: Tenant):
    return activate_module(db=test_db, tenant=acme_tenant, module=ModuleType.STAGE)


@pytest.fixture
def acme_user(test_db: Session, acme_org: Organization) -> User:
    """ACTIVE user a@acme.com holding every stage planner permission"""
    user = create_user(
        db=test_db,
        organization=acme_org,
        email="a@acme.com",
        first_name="Ada",
        last_name="Acme",
    )
    role = create_role(db=test_db, name="Stage Manager", permissions=STAGE_PERMISSIONS)
    assign_role(db=test_db, user=user, role=role)
    return user


@pytest.fixture
def user_password() -> str:
    return DEFAULT_PASSWORD


@pytest.fixture
def issue_token(acme_tenant: Tenant):
    """
    Issue a bearer token for a user.

    Usage:
        token = issue_token(user)
    """
    codec = get_token_codec()

    def _issue(user: User, tenant_id: str | None = None, token_version: int | None = None, **kwargs) -> str:
        return codec.issue(
            user_id=user.id,
            email=user.email,
            organization_id=kwargs.pop("organization_id", user.organization_id),
            tenant_id=tenant_id or acme_tenant.id,
            token_version=user.token_version if token_version is None else token_version,
            **kwargs,
        )

    return _issue


@pytest.fixture
def auth_headers(acme_user: User, issue_token) -> dict[str, str]:
    """
    HTTP headers with a valid bearer token and tenant for acme_user.

    Usage:
        def test_endpoint(client, auth_headers):
            response = client.get("/api/stageplanner/events", headers=auth_headers)
    """
    return {
        "Authorization": f"Bearer {issue_token(acme_user)}",
        "X-Tenant-Id": "acme",
    }
