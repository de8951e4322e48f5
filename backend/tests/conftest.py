"""Test fixtures for the rental desk backend."""
from __future__ import annotations

import os
import uuid
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from app.core.config import get_settings
from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import create_engine_for_url, dispose_engine, get_sessionmaker
from app.main import app
from app.models import Business, User, UserRole, UserStatus


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_engine_for_url(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def db_session(reset_database: None, db_url: str) -> AsyncIterator[AsyncSession]:
    """Yield a session against a freshly created schema."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        yield session


@pytest_asyncio.fixture()
async def business(db_session: AsyncSession) -> Business:
    """Persist a tenant for service-level tests."""
    record = Business(name="Lakeside Rentals", slug=f"lakeside-{uuid.uuid4().hex[:8]}")
    db_session.add(record)
    await db_session.commit()
    return record


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and seeded business data."""
    sessionmaker = get_sessionmaker(db_url)
    owner_password = "Passw0rd!"

    async with sessionmaker() as session:
        tenant = Business(name="Test Rentals", slug=f"test-{uuid.uuid4().hex[:8]}")
        other = Business(name="Other Rentals", slug=f"other-{uuid.uuid4().hex[:8]}")
        session.add_all([tenant, other])
        await session.flush()

        owner = User(
            business_id=tenant.id,
            email="owner@example.com",
            hashed_password=get_password_hash(owner_password),
            first_name="Robin",
            last_name="Owner",
            role=UserRole.OWNER,
            status=UserStatus.ACTIVE,
        )
        other_owner = User(
            business_id=other.id,
            email="other.owner@example.com",
            hashed_password=get_password_hash(owner_password),
            first_name="Alex",
            last_name="Elsewhere",
            role=UserRole.OWNER,
            status=UserStatus.ACTIVE,
        )
        session.add_all([owner, other_owner])
        await session.commit()

        context: dict[str, object] = {
            "business_id": tenant.id,
            "other_business_id": other.id,
            "owner_email": owner.email,
            "other_owner_email": other_owner.email,
            "owner_password": owner_password,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context


@pytest_asyncio.fixture()
async def auth_headers(app_context: dict[str, object]) -> dict[str, str]:
    """Log in as the seeded owner and return bearer headers."""
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/auth/token",
        data={
            "username": app_context["owner_email"],
            "password": app_context["owner_password"],
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
