"""
Shared fixtures.

Each test gets its own in-memory SQLite database. HTTP tests drive the
FastAPI app through httpx with ``get_db`` pointed at that database.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-signing-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  (register tables)
from app.core.config import get_settings
from app.core.dependencies import get_password_hasher, get_token_service
from app.db import Base, get_db
from app.models.user import User, UserRole
from main import app

SECRET_KEY = os.environ["JWT_SECRET_KEY"]
ADMIN_PASSWORD = "Admin123!"


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, start=None):
        self.current = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def token_service():
    return get_token_service()


@pytest.fixture
def password_hasher():
    return get_password_hasher()


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_headers(client, session_factory, password_hasher):
    async with session_factory() as session:
        session.add(
            User(
                username="admin",
                email="admin@company.com",
                password_hash=password_hasher.hash(ADMIN_PASSWORD),
                full_name="System Administrator",
                role=UserRole.ADMIN.value,
            )
        )
        await session.commit()

    response = await client.post(
        "/api/auth/login",
        json={"username": "admin", "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def user_headers(client):
    response = await client.post(
        "/api/auth/register",
        json={
            "username": "clerk",
            "email": "clerk@company.com",
            "password": "Clerk123!",
            "fullName": "Office Clerk",
        },
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
