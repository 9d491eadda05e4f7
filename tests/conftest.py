import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.db.database import get_db, init_db
from app.api.utils import redis_client
from app.api.v1.models.user import UserRole
from main import app
from tests.factories import token_for


class FakeRevocationStore:
    """In-memory stand-in for the Redis revocation keys."""

    def __init__(self):
        self.revoked = {}

    async def revoke_token(self, jti: str, ttl: int):
        self.revoked[jti] = ttl

    async def is_token_revoked(self, jti: str) -> bool:
        return jti in self.revoked


@pytest.fixture(autouse=True)
def revocation_store(monkeypatch):
    store = FakeRevocationStore()
    monkeypatch.setattr(redis_client, "revoke_token", store.revoke_token)
    monkeypatch.setattr(redis_client, "is_token_revoked", store.is_token_revoked)
    return store


@pytest.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(engine):
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


@pytest.fixture()
def client():
    """TestClient with a placeholder DB session; route tests patch the services."""
    async def _override_get_db():
        yield MagicMock(spec=AsyncSession)

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin_token():
    return token_for(UserRole.ADMIN, email="admin@example.com")


@pytest.fixture()
def customer_token():
    return token_for(UserRole.CUSTOMER, email="customer@example.com")
